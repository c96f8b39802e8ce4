"""
PlateProof - Payment-backed restaurant reviews

CLI entry point for building the listings read model from a record snapshot.
"""

import argparse
import logging
import random
import sys

from src.orchestrator import ReadModelBuilder
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="PlateProof - Payment-backed restaurant reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the view from data/listings.json, data/reviews.json, data/receipts.json
  python main.py

  # Restaurants within 5 km of a point
  python main.py --near 40.7128 -74.0060 --radius-km 5

  # Search, include closed listings, write schema.org documents
  python main.py --search pizza --all-statuses --structured-data

Note: Set PLATEPROOF_PLATFORM_PUBKEY to the platform payment identity.
        """
    )
    
    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Snapshot directory (default: {settings.DATA_ROOT})"
    )
    
    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )
    
    parser.add_argument(
        "--platform-key",
        default=settings.PLATFORM_PUBKEY,
        help="Platform payment identity (default: $PLATEPROOF_PLATFORM_PUBKEY)"
    )
    
    parser.add_argument(
        "--near",
        nargs=2,
        type=float,
        metavar=("LAT", "LNG"),
        help="Only keep listings near this point"
    )
    
    parser.add_argument(
        "--radius-km",
        type=float,
        default=settings.DEFAULT_RADIUS_KM,
        help=f"Radius for --near (default: {settings.DEFAULT_RADIUS_KM})"
    )
    
    parser.add_argument(
        "--search",
        help="Case-insensitive search over name, address and description"
    )
    
    parser.add_argument(
        "--all-statuses",
        action="store_true",
        help="Include closed and inactive listings"
    )
    
    parser.add_argument(
        "--structured-data",
        action="store_true",
        help="Also write schema.org JSON-LD documents"
    )
    
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for featured review selection (default: $PLATEPROOF_FEATURED_SEED)"
    )
    
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    
    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)
    
    if not args.platform_key:
        logger.error(
            "No platform identity configured. "
            "Set PLATEPROOF_PLATFORM_PUBKEY or pass --platform-key."
        )
        sys.exit(1)
    
    seed = args.seed
    if seed is None and settings.FEATURED_SEED:
        try:
            seed = int(settings.FEATURED_SEED)
        except ValueError:
            logger.error(
                f"Invalid PLATEPROOF_FEATURED_SEED: {settings.FEATURED_SEED!r}. "
                "Must be an integer."
            )
            sys.exit(1)
    
    # Print banner
    print("=" * 60)
    print("PlateProof - Payment-backed restaurant reviews")
    print("=" * 60)
    print(f"Snapshot: {args.data_root}")
    if args.near:
        print(f"Near: {args.near[0]}, {args.near[1]} ({args.radius_km} km)")
    if args.search:
        print(f"Search: {args.search}")
    print("=" * 60)
    print()
    
    try:
        builder = ReadModelBuilder(
            platform_key=args.platform_key,
            rng=random.Random(seed) if seed is not None else None
        )
        
        output_path = builder.run(
            data_root=args.data_root,
            output_dir=args.output_dir,
            near=tuple(args.near) if args.near else None,
            radius_km=args.radius_km,
            query=args.search,
            open_only=not args.all_statuses,
            structured_data=args.structured_data
        )
        
        print()
        print("=" * 60)
        print("✅ Read model built successfully!")
        print("=" * 60)
        print(f"Listings table: {output_path}")
        print(f"Metadata: {output_path.replace('.csv', '_metadata.json')}")
        print("=" * 60)
        
        logger.info("PlateProof completed successfully")
        sys.exit(0)
    
    except KeyboardInterrupt:
        logger.warning("Build interrupted by user")
        print("\n⚠️  Build interrupted")
        sys.exit(1)
    
    except Exception as e:
        logger.error(f"Build failed: {e}", exc_info=True)
        print(f"\n❌ Build failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
