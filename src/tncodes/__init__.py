# src/tncodes/__init__.py
"""
Stabilizer codes glued together from seed codes as tensor networks.

Subpackages:
- codes: SimpleCode, TensorNetworkCode, example and surface codes
- graph: CodeGraph and the combine / fusion / contract surgery
- decoders: tensor network and reference decoders
- adapters: stim conversions
"""
from tncodes.pauli import (
    pauli_commutation,
    pauli_pow,
    pauli_product,
    pauli_weight,
)
from tncodes.codes import (
    InvalidCodeError,
    SimpleCode,
    TensorNetworkCode,
    find_pure_error,
    find_pure_errors,
    find_syndrome,
    verify_code,
)
from tncodes.graph.surgery import (
    FusionError,
    combine,
    contract,
    contract_by_coords,
    fusion,
)

__version__ = "0.1.0"

__all__ = [
    "FusionError",
    "InvalidCodeError",
    "SimpleCode",
    "TensorNetworkCode",
    "combine",
    "contract",
    "contract_by_coords",
    "find_pure_error",
    "find_pure_errors",
    "find_syndrome",
    "fusion",
    "pauli_commutation",
    "pauli_pow",
    "pauli_product",
    "pauli_weight",
    "verify_code",
]
