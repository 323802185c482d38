"""Fold per-round results into each competitor's performance history."""

from league.models import Round, RoundPerformance, Submission, Vote
from league.scoring import calculate_round_positions


def aggregate_performances(
    rounds: list[Round],
    votes_by_round: dict[str, list[Vote]],
    submissions_by_round: dict[str, list[Submission]],
) -> dict[str, list[RoundPerformance]]:
    """Build each competitor's list of round performances.

    Only the given rounds are visited, in the given order. A round without
    votes or submissions contributes nothing.

    Args:
        rounds: The filtered rounds
        votes_by_round: round_id -> votes (may cover more rounds than given)
        submissions_by_round: round_id -> submissions (likewise)

    Returns:
        competitor_id -> performances in round iteration order
    """
    performances: dict[str, list[RoundPerformance]] = {}

    for round_ in rounds:
        result = calculate_round_positions(
            votes_by_round.get(round_.id, []),
            submissions_by_round.get(round_.id, []),
        )
        positions = result.positions
        total_competitors = result.num_competitors

        for competitor_id, points in result.points.items():
            position = positions.get(competitor_id, 0)
            if position <= 0:
                continue
            performances.setdefault(competitor_id, []).append(RoundPerformance(
                round_id=round_.id,
                round_name=round_.name,
                round_date=round_.created_at,
                points_received=points,
                position=position,
                total_competitors=total_competitors,
            ))

    return performances
