"""
Mutation Analysis Module

Generates mutation frequency barplots per cancer type, plain and with FLAGS genes highlighted
"""

import json
import logging
import time
from pathlib import Path

from mutation.chart_spec import build
from mutation.mutation_io import read_gene_list, read_mutation_table
from mutation.plot_mutation_freq import save_chart
from utils.paths import resolve_path

logger = logging.getLogger(__name__)

METADATA_FILE = "plots_metadata.json"


# -------------------------
# ONE CANCER TYPE
# -------------------------

def plot_cancer_type(name, table_path, flags_genes, plots_dir, mutation_settings, plot_settings):
    """
    Build and save the plain and the FLAGS-highlighted chart for one table.

    Returns a summary dict with the written files and gene counts.
    """

    records = read_mutation_table(
        table_path,
        gene_column=mutation_settings["gene_column"],
        count_column=mutation_settings["count_column"],
    )

    min_mutated = mutation_settings["min_mutated"]

    plain = build(records, min_mutated=min_mutated)

    flagged = build(
        records,
        min_mutated=min_mutated,
        highlight_genes=flags_genes,
        highlight_title=mutation_settings["highlight_title"],
    )

    logger.info(
        f"{name.upper()}: {len(plain)} genes with >= {min_mutated} mutated samples, "
        f"{plain.excluded} excluded"
    )

    if flagged.highlighted_genes:
        logger.info(f"{name.upper()}: FLAGS genes plotted: {', '.join(flagged.highlighted_genes)}")

    size = {
        "width": plot_settings["width"],
        "height": plot_settings["height"],
        "dpi": plot_settings["dpi"],
    }

    files = [
        save_chart(plain, plots_dir / f"{name}_mutations.png", **size),
        save_chart(flagged, plots_dir / f"{name}_mutations_flags.png", **size),
    ]

    return {
        "table": str(table_path),
        "plotted": len(plain),
        "excluded": plain.excluded,
        "flags_plotted": list(flagged.highlighted_genes),
        "files": [str(f) for f in files],
    }


# -------------------------
# ALL CANCER TYPES
# -------------------------

def run_mutation_plots(config, root=None):

    mutation_settings = config["mutations"]
    plot_settings = config["plots"]

    plots_dir = resolve_path(plot_settings["dir"], root)
    plots_dir.mkdir(parents=True, exist_ok=True)

    flags_file = resolve_path(mutation_settings["flags_file"], root)

    tables = {
        name: resolve_path(path, root)
        for name, path in mutation_settings["cancer_types"].items()
    }

    for path in [flags_file, *tables.values()]:

        if not Path(path).exists():

            logger.error(f"Input file not found: {path}")
            raise FileNotFoundError(path)

    flags_genes = read_gene_list(flags_file, column=mutation_settings["flags_column"])

    summary = {}

    for name, table_path in tables.items():

        summary[name] = plot_cancer_type(
            name,
            table_path,
            flags_genes,
            plots_dir,
            mutation_settings,
            plot_settings,
        )

    metadata = {
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "min_mutated": mutation_settings["min_mutated"],
        "flags_file": str(flags_file),
        "flags_genes": len(flags_genes),
        "cancer_types": summary,
    }

    metadata_path = plots_dir / METADATA_FILE

    with open(metadata_path, "w") as f:
        json.dump(metadata, f, indent=2)

    logger.info(f"Saved plot metadata to {metadata_path}")

    return [Path(f) for entry in summary.values() for f in entry["files"]]
