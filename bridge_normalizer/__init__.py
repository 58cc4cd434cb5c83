# ==============================================
# Bridge Normalizer
# ==============================================
#
# Package Structure:
#
# bridge_normalizer/
# ├── normalization/    # Flatten XML-bridged JSON into a canonical shape
# ├── classification/   # Locate the response envelope, classify Ack / Errors
# ├── config.py         # Configuration management
# ├── errors.py         # Client / request / system error types
# └── cli.py            # Command line entry point
#
# ==============================================

from .classification import ResponseClassifier, ResponseOutcome, OutcomeKind
from .normalization import FlattenEngine, RequestContext, ArrayKeyExceptionTable

__version__ = "0.1.0"

__all__ = [
    "ResponseClassifier",
    "ResponseOutcome",
    "OutcomeKind",
    "FlattenEngine",
    "RequestContext",
    "ArrayKeyExceptionTable",
]
