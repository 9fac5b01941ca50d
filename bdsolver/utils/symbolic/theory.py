"""Reference formulas of Brans-Dicke theory, as LaTeX."""

ACTION = (
    r"S = (16\pi)^{-1} \int \mathrm d^4 x \sqrt{-g}"
    r"\left(\phi R - (\omega/\phi) \partial_a\phi\partial^a\phi\right)"
)

FIELD_EQUATION = (
    r"G_{\mu\nu} = (8\pi/\phi)T_{\mu\nu} + (\omega/\phi^2) \left(\partial_{\mu}\phi\partial_{\nu}\phi"
    r" - 0.5g_{\mu\nu}\partial_{\sigma}\phi\partial^{\sigma}\phi\right)"
    r" + (1/\phi)(\partial_{\mu}\partial_{\nu}\phi - g_{\mu\nu}\Box\phi) - g_{\mu\nu} (V/2\phi)"
)

# what is actually evaluated: the matter term carries the trace T = g^{mu nu} T_{mu nu}
COMPUTED_FIELD_EQUATION = (
    r"G_{\mu\nu} = (8\pi/\phi)T + (\omega/\phi^2) \left(\partial_{\mu}\phi\partial_{\nu}\phi"
    r" - \frac{1}{2}g_{\mu\nu}\partial_{\sigma}\phi\partial^{\sigma}\phi\right)"
    r" + (1/\phi)(\partial_{\mu}\partial_{\nu}\phi - g_{\mu\nu}\Box\phi) - g_{\mu\nu} (V/2\phi)"
)

BOX_PHI = r"\Box\phi = (8\pi T + 2V - \phi V')/(3+2\omega)"

SYMBOLS = {
    "phi": "scalar field",
    "R": "Ricci scalar",
    "omega": "Brans-Dicke coupling parameter",
    "g": "metric tensor (and its determinant under the square root)",
    "G_{mu nu}": "Einstein tensor",
    "T_{mu nu}": "energy-momentum tensor, T its trace",
    "V": "potential of the scalar field",
    "Box": "Laplace-Beltrami operator",
}

THEORY = {
    "name": "Brans-Dicke theory",
    "reference": "https://en.wikipedia.org/wiki/Brans%E2%80%93Dicke_theory",
    "action": ACTION,
    "fieldEquation": FIELD_EQUATION,
    "computedFieldEquation": COMPUTED_FIELD_EQUATION,
    "boxPhi": BOX_PHI,
    "symbols": SYMBOLS,
}
