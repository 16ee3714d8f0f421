import unittest
from unittest import mock

from routewise import app
from routewise.exceptions import ConfigurationError
from routewise.models import Location, OptimizedRoute


def fake_streamlit():
    st = mock.MagicMock()
    st.columns.return_value = (mock.Mock(), mock.Mock())
    return st


class TestLocationInput(unittest.TestCase):
    def test_invalid_latlng_reports_error(self):
        st = fake_streamlit()
        for text in ("100, 0", "nan, 0", "0, 181"):
            st.text_input.return_value = text
            with mock.patch.object(app, "st", st), mock.patch.object(app, "reverse_geocode") as reverse:
                self.assertIsNone(app.location_input("Start location", key="start"))
                reverse.assert_not_called()
        self.assertEqual(st.error.call_count, 3)

    def test_latlng_labelled_by_reverse_lookup(self):
        st = fake_streamlit()
        st.text_input.return_value = "37.7749, -122.4194"
        with mock.patch.object(app, "st", st), mock.patch.object(
            app, "reverse_geocode", return_value="San Francisco City Hall"
        ):
            loc = app.location_input("Start location", key="start")
        self.assertEqual(loc, Location("San Francisco City Hall", 37.7749, -122.4194))


class TestRouteDisplay(unittest.TestCase):
    def test_order_shown_when_directions_fail(self):
        st = fake_streamlit()
        st.number_input.return_value = 1
        st.checkbox.return_value = True
        st.button.return_value = True
        start = Location("Depot", 37.7749, -122.4194)
        stop = Location("Customer A", 37.7849, -122.4094)
        with mock.patch.object(app, "st", st), mock.patch.object(
            app, "location_input", side_effect=[start, stop]
        ), mock.patch.object(app, "mapbox_token", return_value=None), mock.patch.object(
            app, "directions_for_route", side_effect=ConfigurationError("no token")
        ):
            app.main()
        st.warning.assert_called_once()
        st.error.assert_not_called()
        rows = st.table.call_args[0][0]
        self.assertEqual([row["Address"] for row in rows], ["Depot", "Customer A", "Depot"])

    def test_show_route_without_directions_uses_estimate(self):
        st = fake_streamlit()
        route = OptimizedRoute(
            coordinates=[(-122.4194, 37.7749), (-122.4094, 37.7849), (-122.4194, 37.7749)],
            order=[0, 1, 2],
            distance=1.76,
            addresses=["Depot", "Customer A", "Depot"],
        )
        with mock.patch.object(app, "st", st):
            app.show_route(route)
        col_distance, col_duration = st.columns.return_value
        col_distance.metric.assert_called_once_with("Total distance", "1.8 miles")
        col_duration.metric.assert_called_once_with("Estimated time", "Calculating...")


if __name__ == "__main__":
    unittest.main()
