import argparse
import sys

from utils.config import DEFAULT_CONFIG_FILE, DEFAULTS, load_config
from utils.logger import setup_logger
from utils.paths import resolve_path
from mutation.mutation_analysis import run_mutation_plots
from data_fetchers.fastq_fetch import fetch_paired_fastq


STEPS = ("plots", "fastq", "all")

DEFAULT_LOG_DIR = DEFAULTS["logging"]["dir"]


def run_plots_step(config, logger):

    logger.info("Running mutation plot pipeline")

    written = run_mutation_plots(config)

    logger.info(f"Mutation plots complete: {len(written)} files written")

    return written


def run_fastq_step(config, logger):

    settings = config["fastq"]

    logger.info(f"Fetching FASTQ files for {settings['run_id']} ({settings['study_id']})")

    line_counts = fetch_paired_fastq(
        settings["run_id"],
        settings["study_id"],
        raw_dir=resolve_path(settings["raw_dir"]),
        trimmed_dir=resolve_path(settings["trimmed_dir"]),
        reports_dir=resolve_path(settings["reports_dir"]),
        base_url=settings["base_url"],
        timeout=settings["timeout"],
    )

    logger.info("FASTQ fetch complete")

    return line_counts


def parse_args(argv=None):

    parser = argparse.ArgumentParser(
        description="Mutation frequency plots and FASTQ download"
    )

    parser.add_argument(
        "--step",
        choices=STEPS,
        default="plots",
        help="Pipeline step to run (plots, fastq, or all)",
    )

    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_FILE),
        help="Path to config.yaml",
    )

    return parser.parse_args(argv)


def main(argv=None):

    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except Exception as e:

        logger = setup_logger(None, log_dir=resolve_path(DEFAULT_LOG_DIR))
        logger.error(f"Could not load config {args.config}: {e}")
        return 1

    # root logger, so module loggers share the handlers
    logger = setup_logger(None, log_dir=resolve_path(config["logging"]["dir"]))

    logger.info("Pipeline started")

    try:

        if args.step in ("plots", "all"):
            run_plots_step(config, logger)

        if args.step in ("fastq", "all"):
            run_fastq_step(config, logger)

    except Exception as e:

        logger.error(f"Pipeline failed: {e}")
        return 1

    logger.info("Pipeline finished")

    return 0


if __name__ == "__main__":

    sys.exit(main())
