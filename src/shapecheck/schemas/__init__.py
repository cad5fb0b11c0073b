"""Schema descriptors — immutable validation rules and their combinators.

Schemas depend on the domain layer only. Entry points live in
:mod:`shapecheck.executor`; factory functions in :mod:`shapecheck.builders`.
"""
