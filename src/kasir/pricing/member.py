from __future__ import annotations

from ..models import MemberPoints

POINT_VALUE_RUPIAH = 200_000


def compute_member_points(amount: int) -> int:
    if amount <= 0:
        return 0
    return amount // POINT_VALUE_RUPIAH


def points_to_rupiah(points: int) -> int:
    return max(0, points) * POINT_VALUE_RUPIAH


def next_threshold(amount: int) -> int:
    """Rupiah still needed to earn the next point."""
    amount = max(0, amount)
    needed = (compute_member_points(amount) + 1) * POINT_VALUE_RUPIAH - amount
    return max(0, needed)


def summarize_member_points(amount: int) -> MemberPoints:
    points = compute_member_points(amount)
    return MemberPoints(
        amount=amount,
        points=points,
        points_value=points_to_rupiah(points),
        next_threshold=next_threshold(amount),
    )
