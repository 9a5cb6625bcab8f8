"""Natural-language query compilation.

The nlq layer converts a free-form English request into a JQL or CQL string through a fixed,
data-driven table of pattern matchers. Compilation is pure: the same text always yields the same
query, and no network I/O happens here.
"""
