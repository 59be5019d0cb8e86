"""
Paired-end FASTQ fetcher for ENA

Downloads both mates of one sequencing run and counts their lines as a sanity check
"""

import gzip
import logging
import re
from pathlib import Path
from typing import Dict, Tuple

import requests
from tqdm import tqdm

logger = logging.getLogger(__name__)

ENA_BASE = "https://ftp.sra.ebi.ac.uk"

RUN_ACCESSION = re.compile(r"^[SED]RR(\d{6,9})$")

CHUNK_SIZE = 1024 * 1024


# -------------------------------------------------
# URLs and file names
# -------------------------------------------------
def ena_fastq_url(run_id: str, base_url: str = ENA_BASE) -> str:
    """
    Directory URL holding the FASTQ files of a run.

    ENA groups runs by the first six characters of the accession, plus a
    subdirectory taken from the trailing digits once the number has more than
    six of them.
    """
    match = RUN_ACCESSION.match(run_id)

    if not match:
        raise ValueError(f"Not a run accession: {run_id}")

    digits = match.group(1)

    parts = [base_url.rstrip("/"), "vol1", "fastq", run_id[:6]]

    if len(digits) > 6:
        tail = digits[6:]
        parts.append(tail.zfill(3))

    parts.append(run_id)

    return "/".join(parts) + "/"


def paired_fastq_names(run_id: str) -> Tuple[str, str]:
    return f"{run_id}_1.fastq.gz", f"{run_id}_2.fastq.gz"


# -------------------------------------------------
# Download
# -------------------------------------------------
def download_file(url, dest, timeout=60, chunk_size=CHUNK_SIZE):
    """Stream url into dest; nothing is left at dest if the transfer fails"""

    dest = Path(dest)
    partial = dest.with_name(dest.name + ".part")

    logger.info(f"Downloading {url}")

    completed = False

    try:
        with requests.get(url, stream=True, timeout=timeout) as r:
            r.raise_for_status()

            total = int(r.headers.get("content-length", 0)) or None

            with open(partial, "wb") as out, tqdm(
                total=total, unit="B", unit_scale=True, desc=dest.name
            ) as bar:
                for chunk in r.iter_content(chunk_size=chunk_size):
                    out.write(chunk)
                    bar.update(len(chunk))

        completed = True

    except requests.exceptions.RequestException as e:
        logger.error(f"Error downloading {url}: {e}")
        raise

    finally:
        if not completed:
            partial.unlink(missing_ok=True)

    partial.replace(dest)

    return dest


# -------------------------------------------------
# Line counting
# -------------------------------------------------
def count_lines(path, chunk_size=CHUNK_SIZE) -> int:
    """Newline count of a gzip file, as `gunzip -c | wc -l` reports it"""

    lines = 0

    with gzip.open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            lines += chunk.count(b"\n")

    return lines


# -------------------------------------------------
# Main
# -------------------------------------------------
def fetch_paired_fastq(
    run_id: str,
    study_id: str,
    raw_dir="data/raw/fastq",
    trimmed_dir="data/trimmed",
    reports_dir="reports/fastp",
    base_url: str = ENA_BASE,
    timeout: int = 60,
) -> Dict[str, int]:
    """
    Download both mates of run_id into <raw_dir>/<study_id> unless present.

    Also creates the trimmed and report directories used by later steps.

    Returns:
        {file name: line count}
    """

    fastq_dest = Path(raw_dir) / study_id

    for directory in (fastq_dest, Path(trimmed_dir) / study_id, Path(reports_dir)):
        directory.mkdir(parents=True, exist_ok=True)

    url = ena_fastq_url(run_id, base_url)

    line_counts = {}

    for name in paired_fastq_names(run_id):

        target = fastq_dest / name

        if target.exists():
            logger.info(f"{name} already present, skipping download")
        else:
            download_file(url + name, target, timeout=timeout)

        lines = count_lines(target)

        if lines % 4:
            logger.warning(f"{name} has {lines} lines, not a multiple of 4")

        logger.info(f"The number of lines in {name} is: {lines} ({lines // 4} reads)")

        line_counts[name] = lines

    return line_counts
