"""
Mutation Table Readers

Loads mutation count tables and reference gene lists
"""

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional

import pandas as pd

from mutation.chart_spec import InvalidInput, MutationRecord

logger = logging.getLogger(__name__)

DEFAULT_GENE_COLUMN = "Hugo_Symbol"
DEFAULT_COUNT_COLUMN = "mutated_samples"
DEFAULT_FLAGS_COLUMN = "FLAGS"

TAB_SUFFIXES = {".tsv", ".txt", ".tab"}


class MissingColumnError(ValueError):
    """Table is missing a required column"""


def _separator(path: Path) -> str:

    suffixes = [s.lower() for s in path.suffixes if s.lower() != ".gz"]

    if suffixes and suffixes[-1] in TAB_SUFFIXES:
        return "\t"

    return ","


def _require_columns(df, columns, source):

    missing = [col for col in columns if col not in df.columns]

    if missing:
        raise MissingColumnError(f"{source} is missing columns {missing}")


# -------------------------
# MUTATION COUNTS
# -------------------------

def records_from_frame(
    df: pd.DataFrame,
    gene_column: str = DEFAULT_GENE_COLUMN,
    count_column: str = DEFAULT_COUNT_COLUMN,
    source: str = "table",
) -> List[MutationRecord]:
    """Convert a DataFrame of gene symbols and counts into MutationRecords"""

    _require_columns(df, [gene_column, count_column], source)

    unannotated = df[gene_column].isna()

    if unannotated.any():
        logger.warning(f"Skipping {int(unannotated.sum())} rows without a gene symbol in {source}")
        df = df.loc[~unannotated]

    counts = pd.to_numeric(df[count_column], errors="coerce")

    bad = counts.isna() | (counts % 1 != 0)

    if bad.any():
        first = df.loc[bad, gene_column].iloc[0]
        raise InvalidInput(f"Non-integer {count_column} for {first} in {source}")

    return [
        MutationRecord(str(gene).strip(), int(count))
        for gene, count in zip(df[gene_column], counts)
    ]


def read_mutation_table(
    path,
    gene_column: str = DEFAULT_GENE_COLUMN,
    count_column: str = DEFAULT_COUNT_COLUMN,
    sep: Optional[str] = None,
) -> List[MutationRecord]:

    path = Path(path)

    df = pd.read_csv(path, sep=sep or _separator(path))

    logger.info(f"Loaded {len(df)} rows from {path.name}")

    return records_from_frame(df, gene_column, count_column, source=path.name)


# -------------------------
# REFERENCE GENE LIST
# -------------------------

def read_gene_list(path, column: str = DEFAULT_FLAGS_COLUMN) -> FrozenSet[str]:
    """Read one column of gene symbols (e.g. the FLAGS list) into a set"""

    path = Path(path)

    df = pd.read_csv(path, sep=_separator(path))

    _require_columns(df, [column], path.name)

    genes = df[column].dropna().astype(str).str.strip()

    genes = frozenset(g for g in genes if g)

    logger.info(f"Loaded {len(genes)} genes from {path.name}")

    return genes
