import unittest
from unittest import mock

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import MapBox, Nominatim

from routewise import geocode
from routewise.config import settings
from routewise.geocode import (
    UNKNOWN_LOCATION,
    geocode_location,
    parse_latlng,
    reverse_geocode,
    suggest_places,
)


def place(address, lat, lng):
    return mock.Mock(address=address, latitude=lat, longitude=lng)


class TestGeocode(unittest.TestCase):
    def setUp(self):
        geocode.reset_geocoder()
        self.geocoder = mock.Mock()
        patcher = mock.patch("routewise.geocode.get_geocoder", return_value=self.geocoder)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(geocode.reset_geocoder)

    def test_suggest_places(self):
        self.geocoder.geocode.return_value = [
            place("Ferry Building, San Francisco", 37.7955, -122.3937),
            place("Ferry Plaza, San Francisco", 37.7950, -122.3930),
        ]
        suggestions = suggest_places("Ferry Building")
        self.assertEqual(len(suggestions), 2)
        self.assertEqual(suggestions[0].place_name, "Ferry Building, San Francisco")
        self.assertEqual(suggestions[0].to_location().coords, (37.7955, -122.3937))
        self.geocoder.geocode.assert_called_once_with("Ferry Building", exactly_one=False)

    def test_suggestions_are_limited_and_cached(self):
        self.geocoder.geocode.return_value = [place(f"Place {i}", 10, i) for i in range(8)]
        self.assertEqual(len(suggest_places("Place")), 5)
        suggest_places("Place")
        self.assertEqual(self.geocoder.geocode.call_count, 1)

    def test_short_query_skips_provider(self):
        self.assertEqual(suggest_places("SF"), ())
        self.assertEqual(suggest_places("   "), ())
        self.geocoder.geocode.assert_not_called()

    def test_provider_failure_gives_no_suggestions(self):
        self.geocoder.geocode.side_effect = GeocoderTimedOut("slow")
        self.assertEqual(suggest_places("Market Street"), ())

    def test_geocode_location(self):
        self.geocoder.geocode.return_value = [place("Coit Tower", 37.8024, -122.4058)]
        loc = geocode_location("Coit Tower")
        self.assertEqual(loc.address, "Coit Tower")
        self.assertEqual(loc.lnglat, (-122.4058, 37.8024))

    def test_geocode_location_not_found(self):
        self.geocoder.geocode.return_value = None
        self.assertIsNone(geocode_location("nowhere at all"))

    def test_reverse_geocode(self):
        self.geocoder.reverse.return_value = place("1 Dr Carlton B Goodlett Pl", 37.7793, -122.4193)
        self.assertEqual(reverse_geocode(37.7793, -122.4193), "1 Dr Carlton B Goodlett Pl")
        self.geocoder.reverse.assert_called_once_with((37.7793, -122.4193), exactly_one=True)

    def test_reverse_geocode_fallbacks(self):
        self.geocoder.reverse.return_value = None
        self.assertEqual(reverse_geocode(0.0, 0.0), UNKNOWN_LOCATION)
        self.geocoder.reverse.side_effect = GeocoderServiceError("down")
        self.assertEqual(reverse_geocode(0.0, 0.0), UNKNOWN_LOCATION)

    def test_reverse_geocode_provider_value_error(self):
        self.geocoder.reverse.side_effect = ValueError("Must be a coordinate pair or Point")
        self.assertEqual(reverse_geocode(10.0, 10.0), UNKNOWN_LOCATION)

    def test_reverse_geocode_skips_invalid_points(self):
        self.assertEqual(reverse_geocode(100.0, 0.0), UNKNOWN_LOCATION)
        self.assertEqual(reverse_geocode(float("nan"), 0.0), UNKNOWN_LOCATION)
        self.geocoder.reverse.assert_not_called()

    def test_parse_latlng(self):
        self.assertEqual(parse_latlng("37.7749, -122.4194"), (37.7749, -122.4194))
        self.assertIsNone(parse_latlng("Market Street"))
        self.assertIsNone(parse_latlng("Main St, Springfield"))


class TestGeocoderSelection(unittest.TestCase):
    def tearDown(self):
        geocode.reset_geocoder()

    def test_mapbox_when_token_configured(self):
        geocode.reset_geocoder()
        with mock.patch.object(settings, "mapbox_access_token", "pk.test"):
            self.assertIsInstance(geocode.get_geocoder(), MapBox)

    def test_nominatim_without_token(self):
        geocode.reset_geocoder()
        with mock.patch.object(settings, "mapbox_access_token", None):
            geocoder = geocode.get_geocoder()
        self.assertIsInstance(geocoder, Nominatim)
        self.assertIs(geocode.get_geocoder(), geocoder)

    def test_invalid_points_with_real_nominatim(self):
        geocode.reset_geocoder()
        with mock.patch.object(settings, "mapbox_access_token", None):
            self.assertEqual(reverse_geocode(100.0, 0.0), UNKNOWN_LOCATION)
            self.assertEqual(reverse_geocode(float("nan"), 0.0), UNKNOWN_LOCATION)


if __name__ == "__main__":
    unittest.main()
