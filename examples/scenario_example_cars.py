"""Demonstrates nested scenarios on a unittest test case.

Run with ``python -m unittest examples/scenario_example_cars.py`` or list the
generated names with ``nested-scenarios list examples/scenario_example_cars.py``.
"""

import unittest

from nested_scenarios import ScenarioSuite, ScenarioTestCase, scenario_tests


CARS = {
    "roadster": {"sedan": False, "under_manufacture": False},
    "family": {"sedan": True, "under_manufacture": False},
    "prototype": {"sedan": True, "under_manufacture": True},
}

USERS = {"buyer": {"admin": False}, "car_admin": {"admin": True}}


def visible_cars(user: str | None, sedan: bool) -> list[str] | None:
    """Tiny stand-in for a controller action. ``None`` means "redirect to login"."""
    if user is None:
        return None
    is_admin = USERS[user]["admin"]
    return [
        name
        for name, car in CARS.items()
        if car["sedan"] == sedan and (is_admin or not car["under_manufacture"])
    ]


cars = ScenarioSuite()

with cars.scenario(latest_models=True):
    with cars.scenario(sedan=True):

        @cars.add_test("unlogged in view of latest sedan cars")
        def _(test):
            test.assertIsNone(test.response)

        with cars.scenario(viewer="buyer"):

            @cars.add_test
            def _(test):
                # Buyers should not see cars under manufacture
                test.assertEqual(test.response, ["family"])

        with cars.scenario(viewer="car_admin", post={"audit": True}):

            @cars.add_test
            def _(test):
                test.assertIn("prototype", test.response)


@scenario_tests(cars)
class CarsTest(ScenarioTestCase):
    def scenario_pre_processing(self, scope):
        self.response = visible_cars(scope.get("viewer"), scope.get("sedan", False))

    def scenario_post_processing(self, scope):
        if scope.get("audit"):
            self.assertTrue(self.response)


if __name__ == "__main__":
    unittest.main()
