"""Power-law Lorentzian fitting.

This module provides the 1-D fit orchestration: parameter containers, the
weighted cost model, the solver facade, the ordered search tables and
uncertainty estimation.
"""

# Parameter management
from chargefit.core.fitting.parameters import Parameter, Parameters, ParameterType

# Cost model and solver facade
from chargefit.core.fitting.cost import PowerLorentzianCost
from chargefit.core.fitting.solver import (
    CovarianceAlgorithm,
    LinearSolver,
    LossKind,
    SolverOptions,
    SolverSummary,
    TerminationType,
    TrustRegion,
    compute_covariance,
    solve,
)

# Search tables
from chargefit.core.fitting.policy import (
    COVARIANCE_ATTEMPTS,
    DATASET_VARIANTS,
    SOLVER_CONFIGURATIONS,
    CovarianceAttempt,
    DatasetVariant,
    SolverConfiguration,
)

# Orchestration
from chargefit.core.fitting.orchestrator import ProfileFitter, fit_power_lorentzian
from chargefit.core.fitting.session import SolverSession, default_session
from chargefit.core.fitting.uncertainty import estimate_errors, heuristic_errors

__all__ = [
    "COVARIANCE_ATTEMPTS",
    "DATASET_VARIANTS",
    "SOLVER_CONFIGURATIONS",
    "CovarianceAlgorithm",
    "CovarianceAttempt",
    "DatasetVariant",
    "LinearSolver",
    "LossKind",
    "Parameter",
    "ParameterType",
    "Parameters",
    "PowerLorentzianCost",
    "ProfileFitter",
    "SolverConfiguration",
    "SolverOptions",
    "SolverSession",
    "SolverSummary",
    "TerminationType",
    "TrustRegion",
    "compute_covariance",
    "default_session",
    "estimate_errors",
    "fit_power_lorentzian",
    "heuristic_errors",
    "solve",
]
