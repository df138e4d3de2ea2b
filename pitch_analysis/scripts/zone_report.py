#!/usr/bin/env python3
"""Rank zones, pitch categories or drills from logged rep sets."""

import argparse
import csv
from pathlib import Path
from typing import List, Optional

from pitch_analysis.core import (
    RepRecord, CountSituation, load_config, setup_logging, get_logger,
    aggregate_reps, rep_performers, overall_pct, weak_spots
)

logger = get_logger('scripts.zone_report')

DIMENSIONS = ('zone', 'pitch_category', 'count_situation', 'drill_type', 'player')


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(';') if part.strip()]


def _parse_situation(value: str) -> CountSituation:
    """Accept Ahead/Even/Behind in any case."""
    try:
        return CountSituation(value.strip().title())
    except ValueError:
        raise ValueError(f"Unknown count situation: {value!r}") from None


def load_rep_records(file_path: str) -> List[RepRecord]:
    """Load rep sets from a CSV file.

    Zones and pitch categories are semicolon-separated, e.g. "Inside High;Outside Low".
    """
    records = []

    with open(file_path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for row in reader:
            situation = row.get('count_situation') or None
            records.append(RepRecord(
                player_id=row['player_id'],
                executed=float(row['executed']),
                attempted=float(row['attempted']),
                zones=_split(row.get('zones')),
                pitch_categories=_split(row.get('pitch_categories')),
                count_situation=_parse_situation(situation) if situation else None,
                drill_type=row.get('drill_type') or None,
            ))

    return records


def create_sample_records() -> List[RepRecord]:
    """Sample rep sets for trying the report."""
    return [
        RepRecord("Avery", 9, 10, zones=["Inside High"], drill_type="Tee Work"),
        RepRecord("Avery", 7, 12, zones=["Outside Low", "Middle Middle"], drill_type="Live BP"),
        RepRecord("Blake", 14, 16, zones=["Outside Low"], drill_type="Tee Work"),
        RepRecord("Blake", 4, 10, zones=["Inside High"], drill_type="Machine",
                  count_situation=CountSituation.BEHIND),
        RepRecord("Casey", 11, 12, zones=["Middle Middle"], drill_type="Tee Work",
                  count_situation=CountSituation.AHEAD),
        RepRecord("Casey", 3, 8, zones=["Outside Low"], drill_type="Live BP"),
    ]


def display_ranking(records: List[RepRecord], dimension: str, min_samples: int,
                    top_n: int, gap: float):
    """Print the ranking table, top performers and weak spots."""
    aggregator = aggregate_reps(records, dimension, min_samples)
    performers = rep_performers(records, dimension, min_samples)

    print(f"\nExecution by {dimension} (min {min_samples} attempts)")
    print("=" * 60)
    print(f"{'Pos':<4} {'Name':<24} {'Exec':<8} {'Att':<8} {'Pct':<6}")
    print("-" * 60)
    for i, entry in enumerate(aggregator.rank(), 1):
        print(f"{i:<4} {str(entry.key):<24} {entry.executed:<8.1f} "
              f"{entry.attempted:<8.1f} {entry.pct:<6.1f}")

    skipped = [key for key in aggregator.keys()
               if not aggregator.summary_for(key)['eligible']]
    if skipped:
        print(f"Not enough data: {', '.join(str(k) for k in skipped)}")

    if dimension != 'player':
        print("\nTop performers")
        for row in performers.breakdown(top_n=top_n):
            names = ', '.join(f"{e.key} ({e.pct:.0f}%)" for e in row['top_performers'])
            print(f"  {str(row['name']):<24} {names or '-'}")

    overall = overall_pct(records)
    spots = weak_spots(aggregator, overall, gap=gap)
    if spots:
        print(f"\nWeak spots (overall {overall:.1f}%)")
        for spot in spots:
            print(f"  {str(spot['name']):<24} {spot['pct']:.1f}% (-{spot['gap']:.1f})")


def main(argv: Optional[List[str]] = None) -> int:
    """Main report function."""
    parser = argparse.ArgumentParser(description='Rank execution from logged rep sets')
    parser.add_argument('--reps', help='Path to rep sets CSV file')
    parser.add_argument('--sample', action='store_true', help='Use sample data')
    parser.add_argument('--dimension', choices=DIMENSIONS, default='zone',
                        help='What to group rep sets by')
    parser.add_argument('--team', action='store_true',
                        help='Use the team sample-size threshold instead of the player one')
    parser.add_argument('--config', help='Path to zone config YAML')
    parser.add_argument('--log-config', help='Path to logging config JSON')

    args = parser.parse_args(argv)

    setup_logging(args.log_config)
    config = load_config(args.config)

    if args.sample:
        print("Using sample rep sets...")
        records = create_sample_records()
    elif args.reps:
        if not Path(args.reps).exists():
            print(f"Error: Rep file not found: {args.reps}")
            return 1
        print(f"Loading rep sets from: {args.reps}")
        try:
            records = load_rep_records(args.reps)
        except (KeyError, ValueError) as e:
            logger.error(f"Could not read rep sets from {args.reps}: {e}")
            print(f"Error: Invalid rep file: {e}")
            return 1
        logger.info(f"Loaded {len(records)} rep sets")
    else:
        print("Error: Please provide --reps file or use --sample")
        return 1

    min_samples = config.team_min_samples if args.team else config.player_min_samples
    display_ranking(records, args.dimension, min_samples,
                    config.top_performers, config.weak_spot_gap)

    print(f"\nTotal sets processed: {len(records)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
