# ==============================================
# Tests for FlattenEngine
# ==============================================

import copy

import pytest

from bridge_normalizer.normalization import FlattenEngine, RequestContext


class TestSingletonCollapse:
    """One-element lists collapse into their sole element."""

    def test_top_level_singleton(self, bare_engine, context):
        assert bare_engine.flatten(["x"], 5, context) == "x"

    def test_singleton_matches_flattened_member(self, bare_engine, context):
        member = {"OrderID": ["7"], "Status": ["Active"]}
        assert bare_engine.flatten([member], 5, context) == bare_engine.flatten(member, 5, context)

    def test_nested_singletons(self, bare_engine, context):
        assert bare_engine.flatten({"a": [{"b": ["1"]}]}, 5, context) == {"a": {"b": 1}}

    def test_multi_element_list_kept(self, bare_engine, context):
        assert bare_engine.flatten({"a": ["1", "2"]}, 5, context) == {"a": [1, 2]}

    def test_top_level_collapse_ignores_key_policy(self, bare_engine, context):
        """The value being recursed into collapses even when it came from an *Array key."""
        assert bare_engine.flatten([["1", "2"]], 5, context) == [1, 2]

    def test_array_suffix_keeps_singleton(self, bare_engine, context):
        assert bare_engine.flatten({"PictureURLList": ["http://x"]}, 5, context) == {"PictureURLList": ["http://x"]}

    def test_exception_table_keeps_singleton(self, engine, context):
        value = {"Transaction": [{"TransactionID": ["9001"]}]}
        assert engine.flatten(value, 5, context) == {"Transaction": [{"TransactionID": 9001}]}

    def test_exception_table_only_applies_to_its_endpoint(self, engine):
        value = {"Transaction": [{"TransactionID": ["9001"]}]}
        other = RequestContext("Trading", "GetItem")
        assert engine.flatten(value, 5, other) == {"Transaction": {"TransactionID": 9001}}

    def test_protected_mapping_child_left_alone(self, bare_engine, context):
        """A non-flattenable key holding a mapping is not descended into."""
        value = {"ShippingList": {"Cost": ["1"]}}
        assert bare_engine.flatten(value, 5, context) == {"ShippingList": {"Cost": ["1"]}}


class TestValuePairs:

    def test_value_pair_rewritten(self, bare_engine, context):
        assert bare_engine.flatten({"@key": "Color", "__value__": "Red"}, 5, context) == {"Color": "Red"}

    def test_value_pair_value_coerced(self, bare_engine, context):
        assert bare_engine.flatten([{"@key": "Count", "__value__": ["3"]}], 5, context) == {"Count": 3}

    def test_nested_value_pairs(self, bare_engine, context):
        value = {"Specifics": [{"@key": "Size", "__value__": "M"}, {"@key": "Color", "__value__": "Red"}]}
        assert bare_engine.flatten(value, 5, context) == {"Specifics": [{"Size": "M"}, {"Color": "Red"}]}


class TestPluralArrays:

    def test_plural_expansion(self, bare_engine, context):
        value = {"OrderArray": [{"Order": [{"id": "1"}, {"id": "2"}]}]}
        assert bare_engine.flatten(value, 5, context) == {"Orders": [{"id": 1}, {"id": 2}]}

    def test_original_key_removed(self, bare_engine, context):
        value = {"Ack": "Success", "OrderArray": [{"Order": [{"id": "1"}, {"id": "2"}]}]}
        assert "OrderArray" not in bare_engine.flatten(value, 5, context)

    def test_expanded_items_use_full_depth(self, bare_engine, context):
        deep = {"l1": {"l2": {"l3": {"l4": ["1"]}}}}
        value = {"OrderArray": [{"Order": [deep, deep]}]}
        flattened = bare_engine.flatten(value, 1, context)
        assert flattened["Orders"][0] == {"l1": {"l2": {"l3": {"l4": 1}}}}


class TestAmounts:

    def test_amount_conversion(self, bare_engine, context):
        value = {"TotalAmount": {"_": "12.34", "$": {"currencyID": "USD"}}}
        assert bare_engine.flatten(value, 5, context) == {"TotalAmount": {"amount": 12.34, "currencyID": "USD"}}

    @pytest.mark.parametrize("key", ["ShippingServiceCost", "CurrentPrice", "AmountPaid"])
    def test_bridged_amount_list(self, bare_engine, context, key):
        value = {key: [{"_": "3.5", "$": {"currencyID": "EUR"}}]}
        assert bare_engine.flatten(value, 5, context) == {key: {"amount": 3.5, "currencyID": "EUR"}}

    def test_other_keys_not_converted(self, bare_engine, context):
        value = {"Total": {"_": "12.34", "$": {"currencyID": "USD"}}}
        assert bare_engine.flatten(value, 5, context) == {"Total": {"_": 12.34, "$": {"currencyID": "USD"}}}


class TestDepth:

    def test_default_depth_when_missing_or_invalid(self, bare_engine, context):
        value = {"a": ["1"]}
        assert bare_engine.flatten(value, None, context) == bare_engine.flatten(value, 10, context)
        assert bare_engine.flatten(value, 0, context) == bare_engine.flatten(value, 10, context)
        assert bare_engine.flatten(value, -1, context) == bare_engine.flatten(value, 10, context)

    def test_beyond_max_depth_only_coerces(self, bare_engine, context):
        value = {"a": {"b": {"c": ["1"]}}}
        assert bare_engine.flatten(value, 1, context) == {"a": {"b": {"c": ["1"]}}}
        assert bare_engine.flatten(value, 2, context) == {"a": {"b": {"c": ["1"]}}}
        assert bare_engine.flatten(value, 3, context) == {"a": {"b": {"c": 1}}}

    def test_scalar_past_depth_still_coerced(self, bare_engine, context):
        assert bare_engine.flatten({"a": {"b": "7"}}, 1, context) == {"a": {"b": 7}}

    def test_engine_default_configurable(self, context):
        value = {"a": {"b": {"c": ["1"]}}}
        assert FlattenEngine(default_max_depth=1).flatten(value, None, context) == {"a": {"b": {"c": ["1"]}}}


class TestPurity:

    def test_input_not_mutated(self, engine, context, bridged_orders_response):
        original = copy.deepcopy(bridged_orders_response)
        engine.flatten(bridged_orders_response, 5, context)
        assert bridged_orders_response == original

    def test_idempotent(self, engine, context, bridged_orders_response):
        once = engine.flatten(bridged_orders_response, 10, context)
        assert engine.flatten(once, 10, context) == once

    def test_idempotent_value_pairs_and_amounts(self, bare_engine, context):
        value = {
            "Specifics": [{"@key": "Size", "__value__": "M"}, {"@key": "Color", "__value__": "Red"}],
            "CurrentPrice": [{"_": "9.99", "$": {"currencyID": "USD"}}],
            "Flags": ["true", "false"],
        }
        once = bare_engine.flatten(value, 10, context)
        assert bare_engine.flatten(once, 10, context) == once

    def test_single_expanded_item_collapses_on_second_pass(self, bare_engine, context):
        """A one-item plural list is only protected by the exception table."""
        once = bare_engine.flatten({"OrderArray": [{"Order": [{"id": "1"}]}]}, 10, context)
        assert once == {"Orders": [{"id": 1}]}
        assert bare_engine.flatten(once, 10, context) == {"Orders": {"id": 1}}

    def test_single_expanded_item_kept_when_listed(self, engine, context):
        once = engine.flatten({"OrderArray": [{"Order": [{"id": "1"}]}]}, 10, context)
        assert engine.flatten(once, 10, context) == once


class TestBridgedResponse:

    def test_full_orders_response(self, engine, context, bridged_orders_response):
        assert engine.flatten(bridged_orders_response, 5, context) == {
            "GetOrdersResponse": {
                "Timestamp": "2024-05-01T10:00:00.000Z",
                "Ack": "Success",
                "Version": 1173,
                "HasMoreOrders": False,
                "Orders": [
                    {
                        "OrderID": "100-1",
                        "AmountPaid": {"amount": 25.5, "currencyID": "USD"},
                        "Transaction": [{"TransactionID": 9001}],
                    },
                    {
                        "OrderID": "100-2",
                        "AmountPaid": {"amount": 7, "currencyID": "EUR"},
                        "Transaction": [{"TransactionID": 9002}, {"TransactionID": 9003}],
                    },
                ],
            },
        }
