"""
Kernel layer.

`pairdex/kernels/python/` holds the integer-only pricing and share math used by
the ledger. Kernels are pure, never touch stores, and raise `ValueError` /
`TypeError` on out-of-domain inputs; domain errors are raised one level up in
`pairdex.core`.
"""
