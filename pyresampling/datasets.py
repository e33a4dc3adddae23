"""
Seeded synthetic example inputs.

Stand-ins shaped like the classic teaching examples for resampling
inference. Each generator takes a seed and returns plain numpy arrays,
so examples and tests are reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.exceptions import ValidationError


def two_sample_example(
    seed: int | None = 1079,
    n1: int = 100,
    n2: int = 80,
    *,
    mean1: float = 0.0,
    sd1: float = 10.0,
    mean2: float = 3.0,
    sd2: float = 0.2,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Two samples with very different spread and a mean shift.

    Defaults: x1 ~ N(0, sd=10), n1 = 100; x2 ~ N(3, sd=0.2), n2 = 80.
    """
    rng = np.random.default_rng(seed)
    x1 = rng.normal(mean1, sd1, size=n1)
    x2 = rng.normal(mean2, sd2, size=n2)
    return x1, x2


@dataclass(frozen=True)
class RepeatedMeasures:
    """
    Long-format repeated-measures layout.

    Attributes:
        response: Measured value, shape (n,).
        treatment: Treatment label per row.
        time: Time point per row (the stratum for restricted permutation).
        subject: Subject identifier per row.
    """
    response: NDArray[np.floating[Any]]
    treatment: NDArray
    time: NDArray
    subject: NDArray


def repeated_measures_example(
    seed: int | None = 42,
    n_subjects: int = 12,
    n_times: int = 4,
    effect: float = 1.5,
    time_trend: float = 2.0,
) -> RepeatedMeasures:
    """
    Subjects split between a control and a treated group, each measured
    at n_times time points. Time carries a strong common trend, so a
    valid permutation must keep observations inside their time point.
    """
    if n_subjects < 2 or n_times < 1:
        raise ValidationError("need at least 2 subjects and 1 time point")
    rng = np.random.default_rng(seed)

    subject = np.repeat(np.arange(n_subjects), n_times)
    time = np.tile(np.arange(n_times), n_subjects)
    treated = subject % 2 == 1
    treatment = np.where(treated, "treated", "control")

    subject_effect = rng.normal(0.0, 1.0, size=n_subjects)[subject]
    response = (
        10.0
        + time_trend * time
        + effect * treated
        + subject_effect
        + rng.normal(0.0, 1.0, size=subject.size)
    )
    return RepeatedMeasures(
        response=response,
        treatment=treatment,
        time=time,
        subject=subject,
    )


@dataclass(frozen=True)
class Community:
    """
    Sites x species cover table with site attributes.

    Attributes:
        cover: Non-negative cover values, shape (n_sites, n_species).
        groups: Habitat label per site.
        chemistry: Soil-chemistry measurements, shape (n_sites, 3)
            (columns: N, P, K).
    """
    cover: NDArray[np.floating[Any]]
    groups: NDArray
    chemistry: NDArray[np.floating[Any]]


def community_example(
    seed: int | None = 7,
    n_sites: int = 24,
    n_species: int = 30,
    shift: float = 1.0,
) -> Community:
    """
    Two habitats whose species abundances differ by a log-scale shift
    on half of the species; soil chemistry tracks habitat.
    """
    if n_sites < 4 or n_species < 2:
        raise ValidationError("need at least 4 sites and 2 species")
    rng = np.random.default_rng(seed)

    groups = np.where(np.arange(n_sites) < n_sites // 2, "heath", "pine")
    in_pine = groups == "pine"

    log_mean = rng.normal(1.0, 0.5, size=n_species)
    shifted = np.zeros(n_species)
    shifted[: n_species // 2] = shift
    log_rate = log_mean[None, :] + np.outer(in_pine, shifted)
    cover = rng.poisson(np.exp(log_rate)).astype(np.float64)

    chemistry = np.column_stack([
        rng.normal(20.0 + 5.0 * in_pine, 3.0),
        rng.normal(45.0, 8.0, size=n_sites),
        rng.normal(160.0 - 30.0 * in_pine, 20.0),
    ])
    return Community(cover=cover, groups=groups, chemistry=chemistry)
