"""
GPU backends for resampling and bootstrap.

GPU accelerates statistic evaluation, not sampling: resample indices
are drawn on the CPU from the same seeded generator the CPU backend
uses, so both backends see identical draws. Built-in two-sample
statistics (mean_diff, t, t_pooled) on 1D data are then evaluated for
all R arrangements in one batched pass. Arbitrary user statistics are
Python callables and fall back to the CPU backend.
"""

from __future__ import annotations

import numpy as np

from pyresampling.core.result import Result
from pyresampling.core.compute.device import DeviceInfo, select_device
from pyresampling.core.compute.timing import Timer
from pyresampling.montecarlo._common import BootParams, NullParams
from pyresampling.montecarlo.backends.cpu import (
    CPUBootstrapBackend, CPUResamplingBackend, summarize_null,
)
from pyresampling.montecarlo.design import BootstrapDesign, ResamplingDesign
from pyresampling.resample import resample_indices

BATCHED_STATISTICS = ("mean_diff", "t", "t_pooled")


def _with_backend_name(result: Result, name: str) -> Result:
    return Result(
        params=result.params,
        info=result.info,
        timing=result.timing,
        backend_name=name,
        warnings=result.warnings,
    )


class GPUResamplingBackend:
    """
    GPU backend for permutation / bootstrap distributions.

    MPS has no float64, so MPS runs in float32 and agrees with the CPU
    reference to the GPU_FP32 tolerance tier.
    """

    def __init__(self, device: DeviceInfo | None = None):
        import torch

        if device is None:
            device = select_device('gpu')
        self._torch = torch
        self._device = device.device_type
        self._dtype = torch.float64 if device.supports_fp64 else torch.float32

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_resampling'

    def supports(self, design: ResamplingDesign) -> bool:
        """True if the design can be evaluated in batch on the device."""
        return (
            design.statistic_name in BATCHED_STATISTICS
            and design.split is not None
            and design.data.ndim == 1
        )

    def solve(self, design: ResamplingDesign) -> Result[NullParams]:
        if not self.supports(design):
            result = CPUResamplingBackend().solve(design)
            return _with_backend_name(result, self.name + " (cpu_fallback)")

        torch = self._torch
        timer = Timer(sync_cuda=self._device == 'cuda')
        timer.start()

        n = design.n
        R = design.R
        rng = np.random.default_rng(design.seed)

        with timer.section('observed_stat'):
            observed = float(design.statistic(design.data))

        with timer.section('draw_indices'):
            index_matrix = np.empty((R, n), dtype=np.int64)
            for b in range(R):
                index_matrix[b] = resample_indices(n, rng, design.sim, design.strata)

        with timer.section('replicates'):
            data_t = torch.as_tensor(design.data, dtype=self._dtype, device=self._device)
            idx_t = torch.as_tensor(index_matrix, device=self._device)
            arrangements = data_t[idx_t]
            null_t = self._batched_statistic(
                arrangements, design.split, design.statistic_name,
            )
            null_stats = null_t.cpu().numpy().astype(np.float64)

        with timer.section('summary'):
            params, messages = summarize_null(
                observed, null_stats, R, design.alternative, design.conf_level,
            )

        timer.stop()

        return Result(
            params=params,
            info={
                'sim': design.sim,
                'n': n,
                'n_strata': 0 if design.strata is None else len(np.unique(design.strata)),
                'statistic': design.statistic_name,
                'split': design.split,
                'device': self._device,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(messages),
        )

    def _batched_statistic(self, arrangements, n1: int, name: str):
        """Evaluate a two-sample statistic for every row of an (R, n) tensor."""
        torch = self._torch
        x = arrangements[:, :n1]
        y = arrangements[:, n1:]
        diff = x.mean(dim=1) - y.mean(dim=1)
        if name == "mean_diff":
            return diff

        n2 = y.shape[1]
        if n1 < 2 or n2 < 2:
            return torch.full_like(diff, float('nan'))
        var1 = x.var(dim=1, correction=1)
        var2 = y.var(dim=1, correction=1)
        if name == "t_pooled":
            sp2 = ((n1 - 1) * var1 + (n2 - 1) * var2) / (n1 + n2 - 2)
            se = torch.sqrt(sp2 * (1.0 / n1 + 1.0 / n2))
        else:
            se = torch.sqrt(var1 / n1 + var2 / n2)
        t = diff / se
        return torch.where(se == 0, torch.full_like(t, float('nan')), t)


class GPUBootstrapBackend:
    """
    GPU backend for bootstrap resampling.

    Bootstrap statistics are arbitrary Python functions of
    (data, indices), so every replicate runs through the CPU backend.
    The class keeps the backend='gpu' option uniform across solvers.
    """

    def __init__(self, device: DeviceInfo | None = None):
        if device is None:
            device = select_device('gpu')
        self._device = device.device_type

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_bootstrap'

    def solve(self, design: BootstrapDesign) -> Result[BootParams]:
        result = CPUBootstrapBackend().solve(design)
        return _with_backend_name(result, self.name + " (cpu_fallback)")
