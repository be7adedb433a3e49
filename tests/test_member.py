from kasir.pricing.member import compute_member_points, next_threshold, summarize_member_points


def test_member_points_per_200k() -> None:
    assert compute_member_points(0) == 0
    assert compute_member_points(199_999) == 0
    assert compute_member_points(400_000) == 2
    assert compute_member_points(-50_000) == 0


def test_next_threshold_and_summary() -> None:
    assert next_threshold(150_000) == 50_000
    assert next_threshold(200_000) == 200_000

    summary = summarize_member_points(450_000)

    assert summary.points == 2
    assert summary.points_value == 400_000
    assert summary.next_threshold == 150_000
