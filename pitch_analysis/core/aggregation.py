"""Per-zone and per-category execution statistics with sample-size gating."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable, List, Optional

from .counts import count_key
from .logging_utils import log_operation
from .types import ClassifiedPitch, CountSituation, RepRecord, ZoneConfig, ZoneStat
from .zones import target_zone_name

logger = logging.getLogger(__name__)


@dataclass
class RankedKey:
    """Read-only view of one key's statistic."""
    key: Hashable
    pct: float
    executed: float
    attempted: float


class ZoneAggregator:
    """Additive (executed, attempted) counts keyed by zone, category or count.

    The aggregator is a derived view: rebuild it from source events rather
    than persisting it. Keys keep first-seen order, which is the final
    tie-break when ranking.
    """

    def __init__(self, min_samples: int = 0):
        """Initialize with the default sample-size gate for ranking."""
        self.min_samples = min_samples
        self.stats: Dict[Hashable, ZoneStat] = {}

    def __len__(self) -> int:
        return len(self.stats)

    def __contains__(self, key) -> bool:
        return key in self.stats

    def keys(self) -> List[Hashable]:
        return list(self.stats)

    def record(self, key: Hashable, executed, attempted: float = 1):
        """Add to a key's counts, creating it on first use.

        ``executed`` may be a bool for a single rep or a count.
        """
        executed = float(executed)
        stat = self.stats.get(key)
        if stat is None:
            stat = ZoneStat()
            stat.add(executed, attempted)
            self.stats[key] = stat
        else:
            stat.add(executed, attempted)

    def summary_for(self, key: Hashable, min_samples: Optional[int] = None) -> Dict:
        """Percentage and sample size for a key; pct is None without attempts."""
        gate = self.min_samples if min_samples is None else min_samples
        stat = self.stats.get(key, ZoneStat())
        return {
            'pct': stat.pct,
            'executed': stat.executed,
            'attempted': stat.attempted,
            'eligible': stat.attempted > 0 and stat.attempted >= gate,
        }

    def summary(self, min_samples: Optional[int] = None) -> Dict[Hashable, Dict]:
        return {key: self.summary_for(key, min_samples) for key in self.stats}

    def eligible(self, min_samples: Optional[int] = None,
                 keys: Optional[Iterable[Hashable]] = None) -> List[RankedKey]:
        """Keys with at least ``min_samples`` attempts, in first-seen order."""
        gate = self.min_samples if min_samples is None else min_samples
        wanted = None if keys is None else set(keys)
        entries = []
        for key, stat in self.stats.items():
            if wanted is not None and key not in wanted:
                continue
            if stat.attempted <= 0 or stat.attempted < gate:
                continue
            entries.append(RankedKey(key, stat.pct, stat.executed, stat.attempted))
        return entries

    def rank(self, keys: Optional[Iterable[Hashable]] = None,
             min_samples: Optional[int] = None,
             top_n: Optional[int] = None,
             descending: bool = True) -> List[RankedKey]:
        """Order eligible keys by percentage.

        Equal percentages go to the key with more attempts, then to the key
        seen first.
        """
        entries = self.eligible(min_samples, keys)
        if descending:
            entries.sort(key=lambda e: (-e.pct, -e.attempted))
        else:
            entries.sort(key=lambda e: (e.pct, -e.attempted))
        return entries[:top_n] if top_n is not None else entries

    def best(self, min_samples: Optional[int] = None,
             keys: Optional[Iterable[Hashable]] = None) -> Optional[RankedKey]:
        ranked = self.rank(keys, min_samples, top_n=1)
        return ranked[0] if ranked else None

    def worst(self, min_samples: Optional[int] = None,
              keys: Optional[Iterable[Hashable]] = None) -> Optional[RankedKey]:
        ranked = self.rank(keys, min_samples, top_n=1, descending=False)
        return ranked[0] if ranked else None

    def totals(self) -> ZoneStat:
        total = ZoneStat()
        for stat in self.stats.values():
            total.add(stat.executed, stat.attempted)
        return total


class PerformerAggregator:
    """Statistics keyed by a dimension and, within it, by individual."""

    def __init__(self, min_samples: int = 10):
        self.min_samples = min_samples
        self.overall = ZoneAggregator(min_samples)
        self.by_key: Dict[Hashable, ZoneAggregator] = {}

    def record(self, key: Hashable, individual: Hashable, executed, attempted: float = 1):
        self.overall.record(key, executed, attempted)
        if key not in self.by_key:
            self.by_key[key] = ZoneAggregator(self.min_samples)
        self.by_key[key].record(individual, executed, attempted)

    def top_performers(self, key: Hashable, min_samples: Optional[int] = None,
                       top_n: int = 3) -> List[RankedKey]:
        inner = self.by_key.get(key)
        if inner is None:
            return []
        return inner.rank(min_samples=min_samples, top_n=top_n)

    def breakdown(self, min_samples: Optional[int] = None, top_n: int = 3) -> List[Dict]:
        """One row per key, busiest first, with its qualifying top performers."""
        rows = []
        for key, stat in self.overall.stats.items():
            rows.append({
                'name': key,
                'attempted': stat.attempted,
                'pct': stat.pct,
                'top_performers': self.top_performers(key, min_samples, top_n),
            })
        rows.sort(key=lambda r: -r['attempted'])
        return rows


def aggregate_pitches(pitches: Iterable[ClassifiedPitch],
                      key_fn: Callable[[ClassifiedPitch], Optional[Hashable]],
                      success: Callable[[ClassifiedPitch], bool] = lambda p: p.is_strike,
                      min_samples: int = 0) -> ZoneAggregator:
    """Build an aggregator in one pass; pitches whose key is None are skipped."""
    aggregator = ZoneAggregator(min_samples)
    for pitch in pitches:
        key = key_fn(pitch)
        if key is None:
            continue
        aggregator.record(key, success(pitch))
    return aggregator


def aggregate_pitches_by_zone(pitches: Iterable[ClassifiedPitch], named: bool = False,
                              **kwargs) -> ZoneAggregator:
    """Group by zone id, or by the coach-facing name when ``named`` is set."""
    if named:
        return aggregate_pitches(
            pitches, lambda p: target_zone_name(p.zone), **kwargs)
    return aggregate_pitches(pitches, lambda p: p.zone, **kwargs)


def aggregate_pitches_by_category(pitches: Iterable[ClassifiedPitch], **kwargs) -> ZoneAggregator:
    return aggregate_pitches(pitches, lambda p: p.pitch_category or None, **kwargs)


def aggregate_pitches_by_count(pitches: Iterable[ClassifiedPitch], **kwargs) -> ZoneAggregator:
    return aggregate_pitches(
        pitches, lambda p: count_key(p.balls_before, p.strikes_before), **kwargs)


def _rep_keys(record: RepRecord, dimension: str) -> List[Hashable]:
    if dimension == 'zone':
        return list(record.zones)
    if dimension == 'pitch_category':
        return list(record.pitch_categories)
    if dimension == 'count_situation':
        return [(record.count_situation or CountSituation.EVEN).value]
    if dimension == 'drill_type':
        return [record.drill_type] if record.drill_type else []
    if dimension == 'player':
        return [record.player_id]
    raise ValueError(f"Unknown rep dimension: {dimension}")


def aggregate_reps(records: Iterable[RepRecord], dimension: str,
                   min_samples: int = 0) -> ZoneAggregator:
    """Aggregate rep sets along one dimension.

    A set tagged with several zones or pitch categories has its counts split
    evenly between them. Sets with no value for the dimension are skipped.
    """
    aggregator = ZoneAggregator(min_samples)
    for record in records:
        keys = _rep_keys(record, dimension)
        if not keys:
            continue
        share = 1.0 / len(keys)
        for key in keys:
            aggregator.record(key, record.executed * share, record.attempted * share)
    return aggregator


def rep_performers(records: Iterable[RepRecord], dimension: str,
                   min_samples: int = 10) -> PerformerAggregator:
    performers = PerformerAggregator(min_samples)
    for record in records:
        keys = _rep_keys(record, dimension)
        if not keys:
            continue
        share = 1.0 / len(keys)
        for key in keys:
            performers.record(key, record.player_id,
                              record.executed * share, record.attempted * share)
    return performers


def overall_pct(records: Iterable[RepRecord]) -> Optional[float]:
    total = ZoneStat()
    for record in records:
        total.add(record.executed, record.attempted)
    return total.pct


def weak_spots(aggregator: ZoneAggregator, overall: Optional[float],
               min_samples: Optional[int] = None, gap: float = 10.0) -> List[Dict]:
    """Eligible keys trailing the overall percentage by at least ``gap`` points."""
    if overall is None:
        return []
    spots = []
    for entry in aggregator.eligible(min_samples):
        shortfall = overall - entry.pct
        if shortfall >= gap:
            spots.append({
                'name': entry.key,
                'pct': entry.pct,
                'attempted': entry.attempted,
                'gap': shortfall,
            })
    spots.sort(key=lambda s: (-s['gap'], -s['attempted']))
    return spots


def build_pitching_breakdowns(pitches: List[ClassifiedPitch],
                              config: Optional[ZoneConfig] = None) -> Dict[str, List[Dict]]:
    """Team breakdowns by pitch category, count and zone with top performers."""
    config = config or ZoneConfig()
    by_category = PerformerAggregator(config.player_min_samples)
    by_count = PerformerAggregator(config.player_min_samples)
    by_zone = PerformerAggregator(config.player_min_samples)

    with log_operation(f"pitching breakdowns ({len(pitches)} pitches)", logger):
        for pitch in pitches:
            individual = pitch.pitcher_id
            if individual is None:
                continue
            if pitch.pitch_category:
                by_category.record(pitch.pitch_category, individual, pitch.is_strike)
            by_count.record(count_key(pitch.balls_before, pitch.strikes_before),
                            individual, pitch.is_strike)
            by_zone.record(target_zone_name(pitch.zone),
                           individual, pitch.is_strike)

        return {
            'by_pitch_category': by_category.breakdown(top_n=config.top_performers),
            'by_count': by_count.breakdown(top_n=config.top_performers),
            'by_zone': by_zone.breakdown(top_n=config.top_performers),
        }
