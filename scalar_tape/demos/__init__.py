"""
Demonstration harnesses for the tape engine.

- miso_scalar: forward, reverse and gradient API on f(x,y,z) = x^2 + z^2 + 2xy + z
  (run with `python -m scalar_tape.demos.miso_scalar`)
"""
