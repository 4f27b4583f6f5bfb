from collections import Counter
from typing import Hashable, Iterable, List


def calculate_chi_square(
    observed_values: List[float], expected_values: List[float]
) -> float:
    """
    Calculate the chi-square statistic given lists of observed and expected values.

    :param observed_values: A list of observed values
    :param expected_values: A list of expected values
    :return: The calculated chi-square statistic
    :raises ValueError: If the observed_values and expected_values lists do not have the same length
    """
    if len(observed_values) != len(expected_values):
        raise ValueError("Observed and expected value lists must have the same length.")

    return sum((o - e) ** 2 / e for o, e in zip(observed_values, expected_values))


def uniformity_chi_square(samples: Iterable[Hashable], categories: List[Hashable]) -> float:
    """
    Chi-square of ``samples`` against a uniform spread over ``categories``.

    Used to check that a shuffle lands every card in every position equally often.

    :param samples: Observed outcomes, each one of ``categories``
    :param categories: Every possible outcome
    :raises ValueError: If there are no categories or no samples
    """
    counts = Counter(samples)
    total = sum(counts.values())
    if not categories or total == 0:
        raise ValueError("Need at least one category and one sample.")

    expected = total / len(categories)
    observed = [counts.get(category, 0) for category in categories]
    return calculate_chi_square(observed, [expected] * len(categories))
