from helpers.naive_diff import (
    NaiveLCS,
    ReferenceMapper,
    DiffVerifier,
    lcs_length,
    verify_diff,
)


__all__ = [
    "NaiveLCS",
    "ReferenceMapper",
    "DiffVerifier",
    "lcs_length",
    "verify_diff",
]
