# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# ==============================================

import pytest

from bridge_normalizer.config import reset_config
from bridge_normalizer.normalization import (
    ArrayKeyExceptionTable,
    ArrayKeyPolicy,
    FlattenEngine,
    RequestContext,
)
from bridge_normalizer.classification import ResponseClassifier


@pytest.fixture
def context():
    """Trading / GetOrders request context."""
    return RequestContext(service_name="Trading", op_type="GetOrders")


@pytest.fixture
def exception_table():
    """Keys that must stay lists for Trading / GetOrders."""
    return ArrayKeyExceptionTable({
        "Trading": {
            "GetOrders": ["Transaction", "Orders"],
        },
    })


@pytest.fixture
def engine(exception_table):
    """Flatten engine using the Trading exception table."""
    return FlattenEngine(ArrayKeyPolicy(exception_table))


@pytest.fixture
def bare_engine():
    """Flatten engine without any exception table."""
    return FlattenEngine()


@pytest.fixture
def classifier(engine):
    return ResponseClassifier(engine)


@pytest.fixture
def bridged_orders_response():
    """GetOrders response as the XML -> JSON bridge emits it."""
    return {
        "GetOrdersResponse": [{
            "Timestamp": ["2024-05-01T10:00:00.000Z"],
            "Ack": ["Success"],
            "Version": ["1173"],
            "HasMoreOrders": ["false"],
            "OrderArray": [{
                "Order": [
                    {
                        "OrderID": ["100-1"],
                        "AmountPaid": [{"_": "25.50", "$": {"currencyID": "USD"}}],
                        "Transaction": [{"TransactionID": ["9001"]}],
                    },
                    {
                        "OrderID": ["100-2"],
                        "AmountPaid": [{"_": "7", "$": {"currencyID": "EUR"}}],
                        "Transaction": [{"TransactionID": ["9002"]}, {"TransactionID": ["9003"]}],
                    },
                ],
            }],
        }],
    }


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Keep the config singleton and environment from leaking between tests."""
    for name in ("FLATTEN_MAX_DEPTH", "RESPONSE_MAX_DEPTH", "ARRAY_KEYS_FILE",
                 "INCLUDE_DEFAULT_ARRAY_KEYS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
