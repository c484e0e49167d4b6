import argparse
import datetime
import logging
import re
import sys
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from fvcore.config import ConfigError, load_project
from fvcore.converters import available_power_kw, convert_power_unit, format_br
from fvcore.errors import SizingError
from fvcore.generation import MONTHS, annual_generation, generation_series
from fvcore.geodesy import format_utm, to_utm
from fvcore.irradiance import IrradianceServiceError, NasaPowerClient
from fvcore.models import ConnectionType, GeoCoordinate, ProjectConfig, SizingResult, UtmCoordinate
from fvstandards.nbr5410 import size_circuit
from fvstandards.nbr5410_tables import AMPACITY, BREAKER_RATINGS, GROUPING_FACTOR, TEMPERATURE_FACTOR, get_derating

logger = logging.getLogger(__name__)


def get_project_input() -> Optional[ProjectConfig]:
    print("\n--- Dados do Projeto ---")
    name = input("Nome do projeto: ").strip() or "Projeto FV"

    try:
        current = float(input("Corrente nominal de saída do inversor (A): ").replace(",", "."))

        print("Tipo de ligação: (1) Monofásico, (2) Trifásico")
        conn = ConnectionType.THREE_PHASE if input("Opção [1]: ").strip() == "2" else ConnectionType.SINGLE_PHASE

        # Power & Unit (ex: 5500 W, 5.5 kWp)
        p_input_str = input("Potência do gerador (ex: 5500 W, 5.5 kWp): ").strip().replace(",", ".")
        match = re.match(r"([0-9\.]+)\s*([a-zA-Z]+)", p_input_str)
        if match:
            power_w = convert_power_unit(float(match.group(1)), match.group(2))
        else:
            power_w = float(p_input_str)

        location = None
        lon_str = input("Longitude (graus decimais, vazio para pular): ").strip().replace(",", ".")
        if lon_str:
            lat_str = input("Latitude (graus decimais): ").strip().replace(",", ".")
            location = GeoCoordinate(longitude=float(lon_str), latitude=float(lat_str))

        hsp = None
        if input("Informar HSP mensal manualmente? (s/n) [n]: ").lower() == "s":
            hsp = tuple(float(input(f"HSP {m}: ").replace(",", ".") or 0) for m in MONTHS)

    except (ValueError, SizingError) as e:
        print(f"Erro em entrada de dados: {e}")
        return None

    return ProjectConfig(
        name=name,
        inverter_current_a=current,
        connection_type=conn,
        generator_power_w=power_w,
        location=location,
        hsp=hsp,
    )


def resolve_hsp(project: ProjectConfig, client: Optional[NasaPowerClient] = None) -> Optional[List[float]]:
    if project.hsp is not None:
        return list(project.hsp)
    if project.location is None:
        return None
    client = client or NasaPowerClient()
    print("\nConsultando NASA POWER (ALLSKY_SFC_SW_DWN)...")
    return client.fetch_monthly_hsp(project.location.latitude, project.location.longitude)


def export_to_excel(
    project: ProjectConfig,
    sizing: SizingResult,
    utm: Optional[UtmCoordinate] = None,
    hsp: Optional[List[float]] = None,
    generation: Optional[List[float]] = None,
    filename: Optional[str] = None,
) -> str:
    wb = Workbook()

    header_fill = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
    header_font = Font(bold=True)

    def style_header(ws, row=1):
        for cell in ws[row]:
            cell.font = header_font
            cell.fill = header_fill

    # --- Sheet 1: Parametrização ---
    ws1 = wb.active
    ws1.title = "Parametrização"
    ws1.append(["MEMÓRIA DE CÁLCULO - PARAMETRIZAÇÃO CA"])
    ws1.append(["Projeto:", project.name])
    ws1.append(["Data:", datetime.datetime.now().strftime("%Y-%m-%d %H:%M")])
    ws1.append([])
    ws1.append(["Parâmetro", "Valor"])
    style_header(ws1, ws1.max_row)
    ws1.append(["Tipo de Ligação", sizing.connection_type.value])
    ws1.append(["Corrente Nominal Ib (A)", sizing.nominal_current])
    ws1.append(["Corrente Corrigida (A)", round(sizing.corrected_current, 2)])
    ws1.append(["Disjuntor In (A)", sizing.breaker.rating])
    ws1.append(["Disjuntor", f"{sizing.breaker.type_label} ({sizing.breaker.poles} polo(s))"])
    ws1.append(["Condutor (mm²)", sizing.conductor.cross_section])
    ws1.append(["Configuração", sizing.conductor.configuration])
    ws1.append(["Ampacidade Iz (A)", sizing.conductor.ampacity])
    derating = get_derating(sizing.connection_type)
    ws1.append(["Fatores", f"FCT {TEMPERATURE_FACTOR} x FCA {GROUPING_FACTOR[sizing.connection_type]} = {derating:.3f}"])
    if project.grid_voltage_v and project.standard_breaker_a:
        p_disp = available_power_kw(project.connection_type, project.grid_voltage_v, project.standard_breaker_a)
        ws1.append(["Potência Disponibilizada (kW)", format_br(p_disp)])
    ws1.column_dimensions["A"].width = 32
    ws1.column_dimensions["B"].width = 36

    # --- Sheet 2: UTM ---
    if utm is not None:
        ws2 = wb.create_sheet("Localização UTM")
        ws2.append(["Coordenada", "Valor"])
        style_header(ws2)
        easting, northing, zone = format_utm(utm)
        if project.location is not None:
            ws2.append(["Longitude (°)", project.location.longitude])
            ws2.append(["Latitude (°)", project.location.latitude])
        ws2.append(["Easting", easting])
        ws2.append(["Northing", northing])
        ws2.append(["Zona", zone])
        ws2.column_dimensions["A"].width = 20
        ws2.column_dimensions["B"].width = 20

    # --- Sheet 3: Geração ---
    if hsp is not None and generation is not None:
        ws3 = wb.create_sheet("Geração Mensal")
        ws3.append(["Mês", "HSP (h)", "Geração (kWh)"])
        style_header(ws3)
        for month, h, kwh in zip(MONTHS, hsp, generation):
            ws3.append([month.capitalize(), h, kwh])
        ws3.append(["Total Anual", None, annual_generation(generation)])
        ws3.append([])
        ws3.append(["Potência do Gerador (W)", project.generator_power_w])

    # --- Sheet 4: NBR 5410 Reference ---
    ws4 = wb.create_sheet("Ref NBR 5410")
    ws4.append(["Seção (mm²)", "Iz Monofásico (A)", "Iz Trifásico (A)"])
    style_header(ws4)
    for section, iz_mono in AMPACITY[ConnectionType.SINGLE_PHASE].items():
        ws4.append([section, iz_mono, AMPACITY[ConnectionType.THREE_PHASE][section]])
    ws4.append([])
    ws4.append(["Disjuntores padronizados (A)"] + list(BREAKER_RATINGS))

    if filename is None:
        filename = f"Memoria_FV_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    wb.save(filename)
    logger.info("Excel written to %s", filename)
    return filename


def run_project(project: ProjectConfig, export: bool = False, client: Optional[NasaPowerClient] = None) -> int:
    print("\nCalculando Parametrização...")
    print("-" * 80)
    try:
        sizing = size_circuit(project.inverter_current_a, project.connection_type)
    except SizingError as e:
        print(f"[ERRO] {e}")
        return 1

    print(f"{'Ib (A)':<8} | {'Icorr (A)':<9} | {'Disjuntor':<18} | {'Condutor':<10} | {'Iz (A)':<7} | {'Configuração'}")
    print(
        f"{sizing.nominal_current:<8.1f} | {sizing.corrected_current:<9.2f} | "
        f"{str(sizing.breaker.rating) + 'A ' + sizing.breaker.type_label:<18} | "
        f"{str(sizing.conductor.cross_section) + ' mm²':<10} | {sizing.conductor.ampacity:<7} | "
        f"{sizing.conductor.configuration}"
    )
    print("-" * 80)

    utm = None
    if project.location is not None:
        utm = to_utm(project.location.longitude, project.location.latitude)
        easting, northing, zone = format_utm(utm)
        print(f"\nUTM (zona {zone}): {easting} | {northing}")

    hsp = None
    generation = None
    try:
        hsp = resolve_hsp(project, client)
    except IrradianceServiceError as e:
        print(f"[AVISO] HSP indisponível: {e}")
    if hsp is not None:
        try:
            generation = generation_series(hsp, project.generator_power_w)
        except SizingError as e:
            print(f"[ERRO] {e}")
            return 1
        print(f"\nGeração estimada ({project.generator_power_w:.0f} W):")
        for month, h, kwh in zip(MONTHS, hsp, generation):
            print(f"  {month.capitalize():<4} HSP {h:>5.2f} -> {format_br(kwh):>10} kWh")
        print(f"  Total anual: {format_br(annual_generation(generation))} kWh")

    if export:
        path = export_to_excel(project, sizing, utm, hsp, generation)
        print(f"\n[INFO] Excel gerado: {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parametrização CA, UTM e geração de sistemas fotovoltaicos")
    parser.add_argument("--config", help="Arquivo de projeto (YAML ou JSON)")
    parser.add_argument("--export", action="store_true", help="Exporta a memória de cálculo em Excel")
    parser.add_argument("--verbose", action="store_true", help="Log detalhado")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("==========================================================")
    print(" CALCULADORA FV - PARAMETRIZAÇÃO CA / UTM / GERAÇÃO")
    print("==========================================================")

    if args.config:
        try:
            project = load_project(args.config)
        except ConfigError as e:
            print(f"[ERRO] {e}")
            return 2
        return run_project(project, export=args.export)

    project = get_project_input()
    if project is None:
        print("Nenhum projeto informado.")
        return 1
    export = args.export or input("\nExportar memória de cálculo para Excel? (s/n): ").lower() == "s"
    return run_project(project, export=export)


if __name__ == "__main__":
    sys.exit(main())
