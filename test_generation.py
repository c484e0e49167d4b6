import unittest

from fvcore.errors import InvalidInputError
from fvcore.generation import (
    MONTHS,
    annual_generation,
    generation_series,
    generation_table,
    hsp_from_mapping,
    monthly_generation,
)

# Typical HSP for São Paulo (NASA POWER 2020-2023 averages)
HSP_SP = [5.62, 5.71, 5.02, 4.46, 3.69, 3.45, 3.63, 4.41, 4.58, 5.11, 5.43, 5.58]


class TestMonthlyGeneration(unittest.TestCase):
    def test_formula(self):
        # 5.5 h x 30 days x 5.5 kWp x 0.80
        self.assertAlmostEqual(monthly_generation(5.5, 5500), 726.0)
        self.assertAlmostEqual(monthly_generation(4.25, 3300), 336.6)

    def test_rounded_to_two_places(self):
        value = monthly_generation(4.37, 4140)
        self.assertEqual(value, round(value, 2))
        self.assertAlmostEqual(value, 4.37 * 30 * 4.14 * 0.8, places=2)

    def test_zero_hsp_gives_zero(self):
        self.assertEqual(monthly_generation(0, 5000), 0.0)

    def test_monotonic(self):
        self.assertLess(monthly_generation(4.0, 5000), monthly_generation(4.5, 5000))
        self.assertLess(monthly_generation(4.5, 5000), monthly_generation(4.5, 6000))

    def test_invalid_inputs(self):
        with self.assertRaises(InvalidInputError):
            monthly_generation(-1, 5000)
        with self.assertRaises(InvalidInputError):
            monthly_generation(5, 0)
        with self.assertRaises(InvalidInputError):
            monthly_generation(float("nan"), 5000)


class TestGenerationSeries(unittest.TestCase):
    def test_positional(self):
        series = generation_series(HSP_SP, 5500)
        self.assertEqual(len(series), 12)
        for hsp, kwh in zip(HSP_SP, series):
            self.assertEqual(kwh, monthly_generation(hsp, 5500))

    def test_length_agnostic(self):
        self.assertEqual(generation_series([], 5500), [])
        self.assertEqual(len(generation_series([5.0, 4.0, 3.0], 5500)), 3)

    def test_annual_total(self):
        series = generation_series(HSP_SP, 5500)
        self.assertAlmostEqual(annual_generation(series), sum(series), places=2)

    def test_hsp_from_mapping(self):
        mapping = {"jan": 5.62, "fev": "5.71", "mar": "", "dez": 5.58}
        values = hsp_from_mapping(mapping)
        self.assertEqual(len(values), 12)
        self.assertEqual(values[0], 5.62)
        self.assertEqual(values[1], 5.71)
        self.assertEqual(values[2], 0.0)
        self.assertEqual(values[11], 5.58)
        with self.assertRaises(InvalidInputError):
            hsp_from_mapping({"jan": "cinco"})

    def test_generation_table(self):
        df = generation_table(HSP_SP, 5500)
        self.assertEqual(list(df.columns), ["Mês", "HSP", "Geração (kWh)"])
        self.assertEqual(len(df), 12)
        self.assertEqual(df["Mês"].iloc[0], MONTHS[0].capitalize())
        self.assertAlmostEqual(df["Geração (kWh)"].iloc[5], monthly_generation(3.45, 5500))


if __name__ == '__main__':
    unittest.main()
