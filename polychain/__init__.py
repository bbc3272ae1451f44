"""Single-variable polynomials as chains of terms.

See `polychain.parse` for reading polynomials from text and
`polychain.chains` for the arithmetic.
"""
