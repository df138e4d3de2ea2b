"""Core modules for pitch zone analysis."""

from .types import (
    InvalidGeometry, InvalidCoordinate,
    Handedness, ZoneId, EdgeZone, ProximityGrade, TargetState, CountSituation,
    Point, NormalizedPoint, Rect, SurfaceBounds,
    ClassifiedPitch, RepRecord, ZoneStat, ZoneConfig
)

from .geometry import normalize, normalize_many, denormalize, fraction_within
from .zones import (
    zone_for, zone_counts, grid_row_col, mirror_zone, mirror_column,
    zone_center, zone_label, short_zone_label, target_zone_name, edge_zone_for
)
from .proximity import ProximityClassifier, classify_pitch, target_rect
from .aggregation import (
    ZoneAggregator, PerformerAggregator, RankedKey,
    aggregate_pitches, aggregate_pitches_by_zone, aggregate_pitches_by_category,
    aggregate_pitches_by_count, aggregate_reps, rep_performers, overall_pct,
    weak_spots, build_pitching_breakdowns
)
from .counts import CountTracker, count_key, count_situation
from .command import (
    distance, proximity_score, miss_direction, miss_pattern, session_summary,
    cell_center_inches, distance_from_target_inches
)
from .session import PitchSession
from .config import load_config, config_from_dict
from .logging_utils import setup_logging, get_logger, log_operation

__all__ = [
    # Types
    'InvalidGeometry', 'InvalidCoordinate',
    'Handedness', 'ZoneId', 'EdgeZone', 'ProximityGrade', 'TargetState', 'CountSituation',
    'Point', 'NormalizedPoint', 'Rect', 'SurfaceBounds',
    'ClassifiedPitch', 'RepRecord', 'ZoneStat', 'ZoneConfig',

    # Geometry and zones
    'normalize', 'normalize_many', 'denormalize', 'fraction_within',
    'zone_for', 'zone_counts', 'grid_row_col', 'mirror_zone', 'mirror_column',
    'zone_center', 'zone_label', 'short_zone_label', 'target_zone_name', 'edge_zone_for',

    # Grading
    'ProximityClassifier', 'classify_pitch', 'target_rect',

    # Aggregation
    'ZoneAggregator', 'PerformerAggregator', 'RankedKey',
    'aggregate_pitches', 'aggregate_pitches_by_zone', 'aggregate_pitches_by_category',
    'aggregate_pitches_by_count', 'aggregate_reps', 'rep_performers', 'overall_pct',
    'weak_spots', 'build_pitching_breakdowns',

    # Counts and command
    'CountTracker', 'count_key', 'count_situation',
    'distance', 'proximity_score', 'miss_direction', 'miss_pattern', 'session_summary',
    'cell_center_inches', 'distance_from_target_inches',

    # Session, config, logging
    'PitchSession',
    'load_config', 'config_from_dict',
    'setup_logging', 'get_logger', 'log_operation',
]
