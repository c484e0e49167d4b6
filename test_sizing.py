import unittest

from fvcore.errors import InvalidInputError, InvalidSizingSequenceError, OutOfRangeError
from fvcore.models import ConnectionType
from fvstandards.nbr5410 import (
    NBR5410Sizer,
    corrected_current,
    select_breaker,
    select_conductor,
    size_circuit,
)
from fvstandards.nbr5410_tables import AMPACITY, BREAKER_RATINGS


class TestBreakerSelection(unittest.TestCase):
    def test_first_rating_strictly_greater(self):
        self.assertEqual(select_breaker(30), 32)
        self.assertEqual(select_breaker(0.5), 20)
        self.assertEqual(select_breaker(124.9), 125)

    def test_exact_rating_selects_next(self):
        # 40A load on a 40A breaker is not allowed: In must be > Ib
        self.assertEqual(select_breaker(40), 50)
        self.assertEqual(select_breaker(20), 25)
        self.assertEqual(select_breaker(100), 125)

    def test_minimum_rating_above_load(self):
        current = 0.25
        while current < 125:
            rating = select_breaker(current)
            self.assertGreater(rating, current)
            smaller = [r for r in BREAKER_RATINGS if current < r < rating]
            self.assertEqual(smaller, [])
            current += 0.75

    def test_out_of_range(self):
        with self.assertRaises(OutOfRangeError):
            select_breaker(125)
        with self.assertRaises(OutOfRangeError):
            select_breaker(300)

    def test_invalid_current(self):
        for bad in (0, -5, float("nan"), float("inf"), "abc"):
            with self.assertRaises(InvalidInputError):
                select_breaker(bad)


class TestConductorSelection(unittest.TestCase):
    def test_corrected_current(self):
        # Ib / (FCT 0.94 * FCA 0.65)
        self.assertAlmostEqual(corrected_current(30, ConnectionType.SINGLE_PHASE), 49.0998, places=3)
        # Ib / (FCT 0.94 * FCA 0.85)
        self.assertAlmostEqual(corrected_current(30, ConnectionType.THREE_PHASE), 37.5469, places=3)

    def test_smallest_section_with_enough_ampacity(self):
        # 10mm2 carries 57A single-phase, 6mm2 only 41A
        self.assertEqual(select_conductor(49.1, ConnectionType.SINGLE_PHASE), 10)
        self.assertEqual(select_conductor(57, ConnectionType.SINGLE_PHASE), 10)
        self.assertEqual(select_conductor(57.01, ConnectionType.SINGLE_PHASE), 16)
        self.assertEqual(select_conductor(28, ConnectionType.THREE_PHASE), 4)
        self.assertEqual(select_conductor(37.5, ConnectionType.THREE_PHASE), 10)

    def test_accepts_portuguese_labels(self):
        self.assertEqual(select_conductor(49.1, "monofásico"), 10)
        self.assertEqual(select_conductor(37.5, "Trifásico"), 10)

    def test_out_of_range(self):
        with self.assertRaises(OutOfRangeError):
            select_conductor(192.5, ConnectionType.SINGLE_PHASE)
        with self.assertRaises(OutOfRangeError):
            select_conductor(171.5, ConnectionType.THREE_PHASE)


class TestSizeCircuit(unittest.TestCase):
    def test_single_phase_30a(self):
        result = size_circuit(30, ConnectionType.SINGLE_PHASE)
        self.assertEqual(result.breaker.rating, 32)
        self.assertEqual(result.breaker.poles, 1)
        self.assertEqual(result.breaker.type_label, "Monopolar")
        self.assertEqual(result.conductor.cross_section, 10)
        self.assertEqual(result.conductor.ampacity, 57)
        self.assertEqual(result.conductor.configuration, "1 phase + 1 neutral")

    def test_three_phase_100a(self):
        # Icorr = 100 / 0.799 = 125.16A -> 50mm2 (134A)
        result = size_circuit(100, "trifásico")
        self.assertEqual(result.breaker.rating, 125)
        self.assertEqual(result.breaker.poles, 3)
        self.assertEqual(result.breaker.type_label, "Tripolar")
        self.assertEqual(result.conductor.cross_section, 50)
        self.assertEqual(result.conductor.configuration, "3 phases + 1 neutral")

    def test_to_dict_shape(self):
        payload = size_circuit(30, "single-phase").to_dict()
        self.assertEqual(payload["breaker"], {"rating": 32, "poles": 1})
        self.assertEqual(payload["conductor"], {"crossSection": 10, "configuration": "1 phase + 1 neutral"})

    def test_discrimination_holds_across_range(self):
        for conn in ConnectionType:
            current = 0.5
            while current < 125:
                try:
                    result = size_circuit(current, conn)
                except OutOfRangeError:
                    # Only single-phase loads above 117.3A run out of conductor table
                    self.assertIs(conn, ConnectionType.SINGLE_PHASE)
                    self.assertGreater(current, 117)
                else:
                    iz = AMPACITY[conn][result.conductor.cross_section]
                    self.assertLess(current, result.breaker.rating)
                    self.assertLess(result.breaker.rating, iz)
                current += 0.5

    def test_conductor_out_of_range_single_phase(self):
        # Breaker 125A exists, but Icorr = 118 / 0.611 = 193.1A > 192A
        with self.assertRaises(OutOfRangeError):
            size_circuit(118, ConnectionType.SINGLE_PHASE)
        self.assertEqual(size_circuit(117, ConnectionType.SINGLE_PHASE).conductor.cross_section, 70)

    def test_unknown_connection_type(self):
        with self.assertRaises(InvalidInputError):
            size_circuit(30, "bifásico")

    def test_inconsistent_tables_fail_hard(self):
        class CoarseBreakers(NBR5410Sizer):
            BREAKER_RATINGS = (63, 125)

        # 30A -> 63A breaker, but 10mm2 only carries 57A
        with self.assertRaises(InvalidSizingSequenceError):
            CoarseBreakers().size_circuit(30, ConnectionType.SINGLE_PHASE)


if __name__ == '__main__':
    unittest.main()
