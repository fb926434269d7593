#!/usr/bin/env python3

"""
Command-line interface for the GFF coordinate remapper.

Remaps features in a GFF3 file from component sequences onto assembled
sequences described by an AGP or mapping GFF3 file.
"""

import argparse
import sys
import logging
from pathlib import Path

from gff_remap.core.config import MAPPING_FORMATS, load_config
from gff_remap.core.exceptions import RemapError
from gff_remap.core.pipeline import RemapPipeline


def setup_logging(log_level: str = "INFO", log_file: str = None) -> None:
    """Set up logging configuration."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Remap GFF3 feature coordinates through AGP or GFF3 mappings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Contig features onto chromosomes using an AGP file
  python remap_cli.py --mapping assembly.agp --input contig_genes.gff3 --output chr_genes.gff3

  # Using contig placements from a GFF3 file, keeping features that do not map
  python remap_cli.py --mapping contigs.gff3 --type contig --pass-through contig_genes.gff3 > out.gff3

  # Chromosome features back onto contigs
  python remap_cli.py --mapping assembly.agp --swap --input chr_genes.gff3 --output contig_genes.gff3
        """
    )

    # Required arguments
    parser.add_argument(
        '--mapping', '-m',
        required=True,
        help='Mapping file (AGP or GFF3)'
    )
    parser.add_argument(
        'input',
        nargs='?',
        help='Input GFF3 file to remap (use - for stdin)'
    )
    parser.add_argument(
        '--input', '-i',
        dest='input_option',
        help='Input GFF3 file to remap (alternative to the positional argument)'
    )

    # Optional parameters
    parser.add_argument(
        '--output', '-o',
        default='-',
        help='Output GFF3 file (default: stdout)'
    )
    parser.add_argument(
        '--mapping-format',
        choices=MAPPING_FORMATS,
        help='Mapping file format (default: auto, from the file extension)'
    )
    parser.add_argument(
        '--type', '-t',
        dest='feature_type',
        help='Only use mapping GFF3 features of this type'
    )
    parser.add_argument(
        '--swap',
        action='store_true',
        help='Swap the mapping direction (assembled -> component)'
    )
    parser.add_argument(
        '--pass-through',
        action='store_true',
        help='Emit features that fall outside every mapping unchanged'
    )
    parser.add_argument(
        '--report',
        help='Write a failure report to this file'
    )
    parser.add_argument(
        '--config',
        help='Configuration file (JSON or YAML)'
    )
    parser.add_argument(
        '--log-file',
        help='Also write log messages to this file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Logging level (default: INFO)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log a line for every feature and list failed IDs'
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    log_level = 'DEBUG' if args.verbose else args.log_level
    setup_logging(log_level, args.log_file)
    logger = logging.getLogger(__name__)

    input_file = args.input_option or args.input

    try:
        config = load_config(config_path=args.config, use_env=True)

        # Override config with command line arguments
        if args.mapping_format is not None:
            config.mapping_format = args.mapping_format
        if args.feature_type is not None:
            config.feature_type = args.feature_type
        if args.swap:
            config.swap_direction = True
        if args.pass_through:
            config.pass_through_unmapped = True
        if args.verbose:
            config.verbose = True

        # Re-validate after CLI overrides.
        config.validate()

        if config.debug_mode:
            logging.getLogger().setLevel(logging.DEBUG)

        pipeline = RemapPipeline(config)
        state = pipeline.run(
            mapping_file=args.mapping,
            input_file=input_file,
            output_file=args.output,
            report_file=args.report
        )

        logger.info(f"Remapping completed: {state.mapped:,} mapped, {state.failed:,} failed")
        return 0

    except RemapError as e:
        logger.error(f"Remapping error: {e}")
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
