"""Demo grammars built on the combinator API.

Submodules:
    calculator - Integer arithmetic with variables
    json - RFC 8259 JSON with an AST and a renderer
"""
