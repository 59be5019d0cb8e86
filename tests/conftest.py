import matplotlib

matplotlib.use("Agg")

import pytest

from mutation.chart_spec import MutationRecord


@pytest.fixture
def scenario_records():
    return [
        MutationRecord("TP53", 10),
        MutationRecord("KRAS", 7),
        MutationRecord("BRAF", 3),
        MutationRecord("NRAS", 1),
    ]
