"""
Pricing helpers shared by the exclusion rules and the budget scorer.
"""

from typing import Optional

from .contracts import Trainer, PackageOption, PackageBoundaries, PackageType


def get_trainer_min_price(trainer: Trainer) -> Optional[float]:
    """
    Lowest package price if the trainer lists priced packages, else the hourly rate.

    Returns None when neither is known.
    """
    prices = [pkg.price for pkg in trainer.package_options if pkg.price]
    if prices:
        return min(prices)
    return trainer.hourly_rate or None


def classify_package(
    package: PackageOption,
    boundaries: PackageBoundaries
) -> Optional[PackageType]:
    """Bucket a package by session count. Unknown session count -> None."""
    if package.sessions is None:
        return None
    if package.sessions <= boundaries.single_session_max_sessions:
        return PackageType.SINGLE_SESSION
    if package.sessions <= boundaries.short_term_max_sessions:
        return PackageType.SHORT_TERM
    return PackageType.ONGOING
