"""Network v2 namespace whose module depends on a sibling that is not installed."""

import fixture_cloud.network.v  # noqa: F401
