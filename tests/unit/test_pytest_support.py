from nested_scenarios import ScenarioSuite
from nested_scenarios.pytest_support import parametrize_scenarios


shop = ScenarioSuite()

with shop.scenario(viewer="buyer"):

    @shop.add_test("sees catalogue")
    def _():
        pass

    with shop.scenario(post={"empty_cart": True}):

        @shop.add_test("checks out")
        def _():
            pass


@parametrize_scenarios(shop)
def test_shop(scenario_test, host):
    scenario_test.run(host)
    assert [kind for kind, _ in host.calls] == ["pre", "post"]
    assert host.calls[0][1] == {"viewer": "buyer"}


def test_mark_uses_canonical_names_as_ids():
    mark = parametrize_scenarios(shop).mark
    assert mark.name == "parametrize"
    assert mark.args[0] == "scenario_test"
    assert list(mark.args[1]) == shop.tests
    assert mark.kwargs["ids"] == [
        "sees_catalogue_viewer_buyer",
        "checks_out_post_empty_cart_true_and_viewer_buyer",
    ]


def test_custom_argname():
    mark = parametrize_scenarios(shop, argname="case").mark
    assert mark.args[0] == "case"
