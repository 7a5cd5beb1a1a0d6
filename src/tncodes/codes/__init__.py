# src/tncodes/codes/__init__.py
"""
Stabilizer code data model.

Available codes:
- SimpleCode: standalone stabilizer code
- TensorNetworkCode: code plus the graph of seed codes it was built from
- five_qubit_code, five_qubit_surface_code, steane_code: small seeds
- random_code, random_stabilizer_state: random stabilizer codes
- surface_code, rotated_surface_code, almost_rotated_surface_code
"""
from tncodes.codes.abstract_code import InvalidCodeError, QuantumCode
from tncodes.codes.simple_code import (
    DistanceSearchError,
    SimpleCode,
    find_distance_logicals,
    find_pure_error,
    find_pure_errors,
    find_syndrome,
    gauge_code,
    in_stabilizer_group,
    permute_code,
    purify_code,
    verify_code,
)
from tncodes.codes.small import (
    five_qubit_code,
    five_qubit_surface_code,
    random_code,
    random_stabilizer_state,
    steane_code,
)
from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.codes.surface import (
    almost_rotated_surface_code,
    rotated_surface_code,
    surface_code,
)

__all__ = [
    "DistanceSearchError",
    "InvalidCodeError",
    "QuantumCode",
    "SimpleCode",
    "TensorNetworkCode",
    "almost_rotated_surface_code",
    "find_distance_logicals",
    "find_pure_error",
    "find_pure_errors",
    "find_syndrome",
    "five_qubit_code",
    "five_qubit_surface_code",
    "gauge_code",
    "in_stabilizer_group",
    "permute_code",
    "purify_code",
    "random_code",
    "random_stabilizer_state",
    "rotated_surface_code",
    "steane_code",
    "surface_code",
    "verify_code",
]
