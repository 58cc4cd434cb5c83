# ==============================================
# Known Array Keys
# ==============================================
#
# Per-endpoint keys that must stay lists even when a response
# happens to contain a single value.
#
#   service name -> operation -> [key, ...]
#
# Search results are the classic case: a page with one hit must
# still expose "item" as a list, or callers have to special-case
# the single-result page.
#
# Extra entries can be supplied through ARRAY_KEYS_FILE (see config.py).
#
# ==============================================

DEFAULT_ARRAY_KEYS = {
    "Finding": {
        "findItemsByKeywords": ["item"],
        "findItemsByCategory": ["item"],
        "findItemsAdvanced": ["item"],
        "findItemsByProduct": ["item"],
        "findItemsIneBayStores": ["item"],
        "findCompletedItems": ["item"],
    },
}
