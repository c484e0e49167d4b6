import io

import pandas as pd
import streamlit as st

from fvcore.converters import available_power_kw, format_br
from fvcore.errors import SizingError
from fvcore.generation import MONTHS, annual_generation, generation_table
from fvcore.geocoding_cache import GeocodingCache
from fvcore.geodesy import format_utm, to_utm
from fvcore.irradiance import IrradianceServiceError, NasaPowerClient
from fvcore.models import ConnectionType
from fvstandards.nbr5410 import size_circuit
from fvstandards.nbr5410_tables import AMPACITY

# --- Page Config ---
st.set_page_config(
    page_title="Calculadora FV - Parametrização",
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header { font-family: 'Inter', sans-serif; color: #166534; font-weight: 700; }
    .stDataFrame { border-radius: 10px; overflow: hidden; }
</style>
""", unsafe_allow_html=True)

# --- Session State Init ---
if "hsp_values" not in st.session_state:
    st.session_state.hsp_values = [0.0] * 12


@st.cache_resource
def get_irradiance_client() -> NasaPowerClient:
    # One cache per server process, shared by every session
    return NasaPowerClient(cache=GeocodingCache())


# --- Helper: Export Excel ---
def to_excel(sizing_df, utm_df=None, generation_df=None):
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        sizing_df.to_excel(writer, index=False, sheet_name="Parametrização")
        if utm_df is not None:
            utm_df.to_excel(writer, index=False, sheet_name="Localização UTM")
        if generation_df is not None:
            generation_df.to_excel(writer, index=False, sheet_name="Geração Mensal")
        ref_df = pd.DataFrame({
            "Seção (mm²)": list(AMPACITY[ConnectionType.SINGLE_PHASE].keys()),
            "Iz Monofásico (A)": list(AMPACITY[ConnectionType.SINGLE_PHASE].values()),
            "Iz Trifásico (A)": list(AMPACITY[ConnectionType.THREE_PHASE].values()),
        })
        ref_df.to_excel(writer, index=False, sheet_name="Ref NBR 5410")
    return output.getvalue()


# --- Sidebar ---
with st.sidebar:
    st.title("Projeto")
    project_name = st.text_input("Nome do projeto", "Projeto FV")
    st.markdown("---")
    st.subheader("Padrão de entrada")
    grid_voltage = st.number_input("Tensão da rede (V)", 0.0, 1000.0, 220.0, step=10.0)
    standard_breaker = st.number_input("Disjuntor do padrão (A)", 0.0, 1000.0, 50.0, step=5.0)

st.markdown("<h1 class='main-header'>☀️ Calculadora de Parametrização FV</h1>", unsafe_allow_html=True)
st.markdown("---")

# --- Section 1: Parametrização ---
st.subheader("⚡ Parametrização do Circuito CA do Inversor")
c1, c2 = st.columns([1, 1])
nominal_current = c1.number_input("Corrente nominal de saída (A)", 0.0, 500.0, 30.0, step=0.5)
conn_label = c2.radio("Tipo de ligação", ["Monofásico", "Trifásico"], horizontal=True)
connection = ConnectionType.parse(conn_label)

sizing_df = None
try:
    sizing = size_circuit(nominal_current, connection)
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Disjuntor", f"{sizing.breaker.rating} A", sizing.breaker.type_label)
    m2.metric("Condutor", f"{sizing.conductor.cross_section} mm²", sizing.conductor.configuration)
    m3.metric("Corrente Corrigida", f"{format_br(sizing.corrected_current)} A")
    m4.metric("Ampacidade", f"{sizing.conductor.ampacity} A")
    if grid_voltage > 0 and standard_breaker > 0:
        st.caption(
            f"Potência disponibilizada pelo padrão: "
            f"{format_br(available_power_kw(connection, grid_voltage, standard_breaker))} kW"
        )
    sizing_df = pd.DataFrame([
        {"Parâmetro": "Projeto", "Valor": project_name},
        {"Parâmetro": "Tipo de Ligação", "Valor": connection.value},
        {"Parâmetro": "Corrente Nominal (A)", "Valor": sizing.nominal_current},
        {"Parâmetro": "Corrente Corrigida (A)", "Valor": round(sizing.corrected_current, 2)},
        {"Parâmetro": "Disjuntor (A)", "Valor": sizing.breaker.rating},
        {"Parâmetro": "Polos", "Valor": sizing.breaker.poles},
        {"Parâmetro": "Condutor (mm²)", "Valor": sizing.conductor.cross_section},
        {"Parâmetro": "Configuração", "Valor": sizing.conductor.configuration},
    ])
except SizingError as e:
    st.error(f"Erro na parametrização: {e}")

# --- Section 2: UTM ---
st.markdown("---")
st.subheader("📍 Coordenadas UTM (Zona 23)")
g1, g2 = st.columns(2)
longitude = g1.number_input("Longitude (°)", -180.0, 180.0, -46.6333, format="%.6f")
latitude = g2.number_input("Latitude (°)", -90.0, 90.0, -23.5505, format="%.6f")

utm_df = None
try:
    utm = to_utm(longitude, latitude)
    easting, northing, zone = format_utm(utm)
    u1, u2, u3 = st.columns(3)
    u1.metric("Easting", easting)
    u2.metric("Northing", northing)
    u3.metric("Zona", zone)
    utm_df = pd.DataFrame([
        {"Coordenada": "Longitude (°)", "Valor": longitude},
        {"Coordenada": "Latitude (°)", "Valor": latitude},
        {"Coordenada": "Easting", "Valor": easting},
        {"Coordenada": "Northing", "Valor": northing},
        {"Coordenada": "Zona", "Valor": zone},
    ])
except SizingError as e:
    st.error(f"Coordenadas inválidas: {e}")

# --- Section 3: Geração ---
st.markdown("---")
st.subheader("📈 Geração Mensal Estimada")
power_w = st.number_input("Potência do gerador (Wp)", 0.0, 1_000_000.0, 5500.0, step=100.0)

if st.button("🌎 Buscar HSP na NASA POWER"):
    try:
        st.session_state.hsp_values = get_irradiance_client().fetch_monthly_hsp(latitude, longitude)
        st.success(f"HSP obtido para {latitude:.4f}, {longitude:.4f}")
    except (IrradianceServiceError, SizingError) as e:
        st.error(f"Erro ao consultar NASA POWER: {e}")

hsp_df = st.data_editor(
    pd.DataFrame({"Mês": [m.capitalize() for m in MONTHS], "HSP": st.session_state.hsp_values}),
    key="hsp_editor",
    disabled=["Mês"],
    use_container_width=True,
    column_config={"HSP": st.column_config.NumberColumn(min_value=0.0, step=0.01, format="%.2f")},
)

generation_df = None
if power_w > 0:
    try:
        generation_df = generation_table(hsp_df["HSP"].fillna(0.0).tolist(), power_w)
        st.dataframe(generation_df, use_container_width=True, hide_index=True)
        st.metric("Total Anual", f"{format_br(annual_generation(generation_df['Geração (kWh)']))} kWh")
    except SizingError as e:
        st.error(f"Erro no cálculo de geração: {e}")

# --- Export ---
if sizing_df is not None:
    st.download_button(
        "📥 Baixar Memória de Cálculo (Excel)",
        data=to_excel(sizing_df, utm_df, generation_df),
        file_name="memoria_fv.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
