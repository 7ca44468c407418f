"""Services Layer — contact stores, listing query, and the contact service.

Invariants:
    - Services own DB transactions; stores never commit
    - Pure decisions (policy, parameter normalization, messages) live in core/
"""
