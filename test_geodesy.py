import unittest

from fvcore.errors import InvalidInputError
from fvcore.geodesy import K0, central_meridian, format_utm, to_utm


class TestUTMConversion(unittest.TestCase):
    def test_sao_paulo(self):
        utm = to_utm(-46.6333, -23.5505)
        print(f"\nSão Paulo -> E {utm.easting} N {utm.northing} {utm.zone_label}")
        self.assertEqual(utm.zone, 23)
        self.assertEqual(utm.hemisphere, "S")
        # Reference values for EPSG:32723 (WGS 84 / UTM zone 23S)
        self.assertAlmostEqual(utm.easting, 333288, delta=1)
        self.assertAlmostEqual(utm.northing, 7394588, delta=1)

    def test_equator_on_central_meridian(self):
        self.assertEqual(central_meridian(23), -45.0)
        utm = to_utm(-45.0, 0.0)
        self.assertEqual(utm.easting, 500000)
        self.assertEqual(utm.northing, 0)
        self.assertEqual(utm.hemisphere, "N")

    def test_meridian_arc_scaled(self):
        # Meridian arc from equator to 10 degrees is ~1,105,855 m on WGS84
        utm = to_utm(-45.0, 10.0)
        self.assertEqual(utm.easting, 500000)
        self.assertAlmostEqual(utm.northing, 1105855 * K0, delta=50)

    def test_hemisphere_symmetry(self):
        north = to_utm(-44.2, 12.5)
        south = to_utm(-44.2, -12.5)
        self.assertEqual(north.easting, south.easting)
        self.assertAlmostEqual(north.northing + south.northing, 10000000, delta=1)

    def test_central_meridian_symmetry(self):
        west = to_utm(-47.0, -5.0)
        east = to_utm(-43.0, -5.0)
        self.assertAlmostEqual(west.easting + east.easting, 1000000, delta=1)
        self.assertEqual(west.northing, east.northing)

    def test_zone_is_fixed(self):
        # Outside zone 23 the point is still projected on zone 23
        self.assertEqual(to_utm(-60.0, -3.1).zone, 23)

    def test_rejects_out_of_domain(self):
        for lon, lat in ((0, 91), (0, -90.5), (181, 0), (-180.1, 0), (float("nan"), 0)):
            with self.assertRaises(InvalidInputError):
                to_utm(lon, lat)

    def test_format_utm(self):
        easting, northing, zone = format_utm(to_utm(-45.0, 0.0))
        self.assertEqual(easting, "E 500000 m")
        self.assertEqual(northing, "N 0 m")
        self.assertEqual(zone, "23N")


if __name__ == '__main__':
    unittest.main()
