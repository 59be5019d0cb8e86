"""
Pipeline configuration

Reads config.yaml and fills in defaults for anything it leaves out
"""

import copy
from pathlib import Path

import yaml

from utils.paths import project_path


DEFAULT_CONFIG_FILE = project_path("config.yaml")

DEFAULTS = {
    "mutations": {
        "min_mutated": 3,
        "gene_column": "Hugo_Symbol",
        "count_column": "mutated_samples",
        "highlight_title": "FLAGS",
        "cancer_types": {
            "gbm": "data/mutations/gbm_mutation_counts.tsv",
            "lgg": "data/mutations/lgg_mutation_counts.tsv",
        },
        "flags_file": "data/mutations/FLAGS.csv",
        "flags_column": "FLAGS",
    },
    "plots": {
        "dir": "plots",
        "width": 1200,
        "height": 800,
        "dpi": 100,
    },
    "fastq": {
        "study_id": "SRP255885",
        "run_id": "SRR11518889",
        "base_url": "https://ftp.sra.ebi.ac.uk",
        "raw_dir": "data/raw/fastq",
        "trimmed_dir": "data/trimmed",
        "reports_dir": "reports/fastp",
        "timeout": 60,
    },
    "logging": {
        "dir": "logs",
    },
}


def merge_config(base, override):
    """Recursively merge override into a copy of base"""

    merged = copy.deepcopy(base)

    for key, value in (override or {}).items():

        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_config(path=DEFAULT_CONFIG_FILE):

    path = Path(path)

    if not path.exists():
        return copy.deepcopy(DEFAULTS)

    with open(path, "r") as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    return merge_config(DEFAULTS, loaded)
