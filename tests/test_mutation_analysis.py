"""
Tests for the per cancer type plotting workflow.
"""

import json

import pytest

from mutation.chart_spec import DuplicateGene
from mutation.mutation_analysis import METADATA_FILE, run_mutation_plots
from utils.config import DEFAULTS, merge_config


GBM = "Hugo_Symbol\tmutated_samples\nTP53\t10\nKRAS\t7\nBRAF\t3\nNRAS\t1\n"
LGG = "Hugo_Symbol\tmutated_samples\nIDH1\t40\nTTN\t12\nATRX\t20\n"
FLAGS = "FLAGS\nTTN\nKRAS\n"


@pytest.fixture
def project(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "gbm.tsv").write_text(GBM)
    (data / "lgg.tsv").write_text(LGG)
    (data / "FLAGS.csv").write_text(FLAGS)

    config = merge_config(DEFAULTS, {
        "mutations": {
            "cancer_types": {"gbm": "data/gbm.tsv", "lgg": "data/lgg.tsv"},
            "flags_file": "data/FLAGS.csv",
        },
        "plots": {"dir": "plots", "width": 400, "height": 300},
    })

    return tmp_path, config


class TestRunMutationPlots:
    """Test the full plotting step."""

    def test_writes_plain_and_flags_plots(self, project):
        """Test that each cancer type gets two PNGs."""
        root, config = project

        written = run_mutation_plots(config, root=root)

        names = sorted(p.name for p in written)
        assert names == [
            "gbm_mutations.png",
            "gbm_mutations_flags.png",
            "lgg_mutations.png",
            "lgg_mutations_flags.png",
        ]
        assert all(p.exists() for p in written)

    def test_metadata(self, project):
        """Test the plot metadata summary."""
        root, config = project

        run_mutation_plots(config, root=root)

        metadata = json.loads((root / "plots" / METADATA_FILE).read_text())
        assert metadata["flags_genes"] == 2
        assert metadata["cancer_types"]["gbm"]["plotted"] == 3
        assert metadata["cancer_types"]["gbm"]["excluded"] == 1
        assert metadata["cancer_types"]["gbm"]["flags_plotted"] == ["KRAS"]
        assert metadata["cancer_types"]["lgg"]["flags_plotted"] == ["TTN"]

    def test_cutoff_from_config(self, project):
        """Test that min_mutated is read from the config."""
        root, config = project
        config["mutations"]["min_mutated"] = 15

        run_mutation_plots(config, root=root)

        metadata = json.loads((root / "plots" / METADATA_FILE).read_text())
        assert metadata["cancer_types"]["gbm"]["plotted"] == 0
        assert metadata["cancer_types"]["lgg"]["plotted"] == 2

    def test_missing_table(self, project):
        """Test that a missing input table stops the step."""
        root, config = project
        (root / "data" / "lgg.tsv").unlink()

        with pytest.raises(FileNotFoundError):
            run_mutation_plots(config, root=root)

    def test_duplicate_gene_surfaces(self, project):
        """Test that a duplicated gene in a table is not silently plotted."""
        root, config = project
        (root / "data" / "gbm.tsv").write_text(GBM + "TP53\t2\n")

        with pytest.raises(DuplicateGene):
            run_mutation_plots(config, root=root)
