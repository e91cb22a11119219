"""Domain layer for shopledger application.

Services live in their own modules (``shopledger.domain.sale`` and so on) and
are imported from there; this package keeps no eager imports so the database
layer can depend on ``entities``, ``errors`` and ``requests`` without cycles.
"""
