import json
import tempfile
import unittest
from pathlib import Path

from fvcore.config import ConfigError, load_project, parse_project
from fvcore.models import ConnectionType

PROJECT_YAML = """
name: Residência Silva
inverter_current_a: 30
connection_type: monofásico
generator_power_w: 5500
location:
  longitude: -46.6333
  latitude: -23.5505
hsp:
  jan: 5.62
  fev: 5.71
  dez: 5.58
grid_voltage_v: 220
standard_breaker_a: 50
"""


class TestProjectConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_yaml(self):
        path = self.dir / "projeto.yaml"
        path.write_text(PROJECT_YAML, encoding="utf-8")
        project = load_project(path)
        self.assertEqual(project.name, "Residência Silva")
        self.assertIs(project.connection_type, ConnectionType.SINGLE_PHASE)
        self.assertEqual(project.inverter_current_a, 30.0)
        self.assertEqual(project.location.latitude, -23.5505)
        self.assertEqual(len(project.hsp), 12)
        self.assertEqual(project.hsp[0], 5.62)
        self.assertEqual(project.hsp[2], 0.0)
        self.assertEqual(project.standard_breaker_a, 50.0)

    def test_load_json_with_hsp_list(self):
        path = self.dir / "projeto.json"
        path.write_text(json.dumps({
            "name": "Galpão",
            "inverter_current_a": 45.5,
            "connection_type": "three-phase",
            "generator_power_w": 30000,
            "hsp": [5.0] * 12,
        }), encoding="utf-8")
        project = load_project(path)
        self.assertIs(project.connection_type, ConnectionType.THREE_PHASE)
        self.assertIsNone(project.location)
        self.assertEqual(project.hsp, tuple([5.0] * 12))

    def test_missing_file_and_extension(self):
        with self.assertRaises(ConfigError):
            load_project(self.dir / "nao-existe.yaml")
        path = self.dir / "projeto.txt"
        path.write_text("name: x", encoding="utf-8")
        with self.assertRaises(ConfigError):
            load_project(path)

    def test_malformed_yaml(self):
        path = self.dir / "ruim.yaml"
        path.write_text("name: [unclosed", encoding="utf-8")
        with self.assertRaises(ConfigError):
            load_project(path)

    def test_validation_errors(self):
        base = {"name": "x", "inverter_current_a": 30, "connection_type": "monofásico", "generator_power_w": 5000}
        with self.assertRaises(ConfigError):
            parse_project({k: v for k, v in base.items() if k != "generator_power_w"})
        with self.assertRaises(ConfigError):
            parse_project(dict(base, connection_type="bifásico"))
        with self.assertRaises(ConfigError):
            parse_project(dict(base, inverter_current_a=-1))
        with self.assertRaises(ConfigError):
            parse_project(dict(base, hsp=[5.0] * 11))
        with self.assertRaises(ConfigError):
            parse_project(dict(base, hsp={"janeiro": 5.0}))
        with self.assertRaises(ConfigError):
            parse_project(dict(base, location={"longitude": -46.6, "latitude": -95}))
        with self.assertRaises(ConfigError):
            parse_project(dict(base, grid_voltage_v="alta"))


if __name__ == '__main__':
    unittest.main()
