"""
Pass the Pigs - Scoring

Pure mapping from a pair of poses to points and an outcome label.

Rules, checked in order:
- Opposite siders (Left + Right): Pig Out, 0 points, turn ends
- Same siders: 1 point
- One sider + one scoring pose: that pose's value
- Double (same scoring pose twice): (value + value) x 2
- Two different scoring poses: sum of values
"""

from pass_the_pigs.engine.base import Pose, ScoringResult

PIG_OUT_LABEL = "Pig Out! Turn ends"
SIDER_LABEL = "Sider (same sides)"

_POSE_ORDER = list(Pose)


def is_pig_out(a: Pose, b: Pose) -> bool:
    """Check if a pair is a Pig Out (siders facing opposite ways)."""
    return {a, b} == {Pose.SIDER_LEFT, Pose.SIDER_RIGHT}


def score_pair(a: Pose, b: Pose) -> ScoringResult:
    """Score a pair of poses.

    Args:
        a: Pose of the first pig
        b: Pose of the second pig

    Returns:
        ScoringResult with points, label and Pig Out status
    """
    # Must precede the same-sider rule; both involve two siders
    if is_pig_out(a, b):
        return ScoringResult(points=0, label=PIG_OUT_LABEL, is_pig_out=True)

    if a.is_sider and b.is_sider:
        return ScoringResult(points=1, label=SIDER_LABEL)

    if a.is_sider or b.is_sider:
        scoring = b if a.is_sider else a
        points = scoring.base_points
        return ScoringResult(points=points, label=f"{scoring.value} (+{points})")

    if a == b:
        points = (a.base_points + b.base_points) * 2
        return ScoringResult(points=points, label=f"Double {a.value} (+{points})")

    # Label in pose order so the result does not depend on throw order
    first, second = sorted((a, b), key=_POSE_ORDER.index)
    points = first.base_points + second.base_points
    return ScoringResult(points=points, label=f"{first.value} + {second.value} (+{points})")
