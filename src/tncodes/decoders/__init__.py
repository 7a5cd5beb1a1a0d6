# src/tncodes/decoders/__init__.py
"""
Decoders for tensor network codes.

Available decoders:
- TNDecoder / tn_decode: maximum-likelihood coset decoding by contraction
- min_weight_brute_force: exhaustive minimum-weight decoding for small codes
- do_nothing_decoder: pure-error baseline
"""
from tncodes.decoders.base import Decoder
from tncodes.decoders.simple import (
    do_nothing_decoder,
    min_weight_brute_force,
    monte_carlo_simulation,
)
from tncodes.decoders.tn_decoder import (
    TNDecoder,
    TNDecoderIncompatibleError,
    basic_contract,
    compare_code_success_empirical,
    compare_code_success_predicted,
    mps_contract,
    tn_coset_probabilities,
    tn_decode,
)

__all__ = [
    "Decoder",
    "TNDecoder",
    "TNDecoderIncompatibleError",
    "basic_contract",
    "compare_code_success_empirical",
    "compare_code_success_predicted",
    "do_nothing_decoder",
    "min_weight_brute_force",
    "monte_carlo_simulation",
    "mps_contract",
    "tn_coset_probabilities",
    "tn_decode",
]
