"""CMS Core Package: content repository layer of a headless CMS.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
