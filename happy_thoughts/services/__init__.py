# Services package init
"""
Happy Thoughts API — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and the store (persistence).
Why:   Routes handle HTTP, services handle not-found rules, envelopes, and
       translation of driver errors.

Service Inventory:
    - ThoughtService: list / get / create / like / delete for thoughts
"""
