import pytest

from nested_scenarios.errors import InvalidDeclaration
from nested_scenarios.naming import canonical_name, host_test_name, render_value


def test_keys_sorted_regardless_of_insertion_order():
    assert canonical_name("hello world", {"z": True, "a": "x"}) == "hello_world_a_x_and_z_true"
    assert canonical_name("hello world", {"a": "x", "z": True}) == "hello_world_a_x_and_z_true"


def test_blank_description_is_omitted():
    assert canonical_name("", {"viewer": "buyer"}) == "viewer_buyer"
    assert canonical_name("   ", {"viewer": "buyer"}) == "viewer_buyer"
    assert canonical_name(None, {"viewer": "buyer"}) == "viewer_buyer"


def test_whitespace_runs_collapse_and_name_is_lower_cased():
    name = canonical_name("Unlogged  in\tView", {"Latest_Models": True, "sedan": True})
    assert name == "unlogged_in_view_latest_models_true_and_sedan_true"


def test_description_without_scope():
    assert canonical_name("plain test", {}) == "plain_test"


def test_empty_description_and_scope_is_rejected():
    with pytest.raises(InvalidDeclaration, match="blank description"):
        canonical_name("", {})


def test_values_render_with_str():
    class Fixture:
        def __str__(self) -> str:
            return "Car Admin"

    assert canonical_name("", {"viewer": Fixture()}) == "viewer_car_admin"


def test_mapping_values_render_sorted():
    left = render_value({"b": 2, "a": 1})
    right = render_value({"a": 1, "b": 2})
    assert left == right == "a_1_b_2"
    assert canonical_name("", {"role": "admin", "post": {"cleanup": True}}) == (
        "post_cleanup_true_and_role_admin"
    )


def test_host_test_name_uses_prefix():
    assert host_test_name("viewer_buyer") == "test_viewer_buyer"
    assert host_test_name("viewer_buyer", prefix="merit_") == "merit_viewer_buyer"


def test_punctuation_collapses_like_whitespace():
    assert canonical_name("hello, world!", {}) == "hello_world"
    assert canonical_name("", {"price": 1.5}) == "price_1_5"
    assert canonical_name("", {"viewer": "car-admin"}) == "viewer_car_admin"


@pytest.mark.parametrize(
    "scope",
    [
        {"price": 1.5},
        {"viewer": "car-admin"},
        {"path": "a.b/c", "note": "Car Admin!"},
        {"post": {"log-out": True}, "ratio": -0.25},
    ],
)
def test_host_names_are_identifiers(scope):
    assert host_test_name(canonical_name("checks it (twice)", scope)).isidentifier()
