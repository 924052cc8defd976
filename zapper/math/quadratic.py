"""Integer quadratic solver for the optimal one-sided swap.

Swapping x of the offer asset into a constant-product pool with commission
rate f leaves the user holding (offer_user - x, ask_user + y(x)) and the pool
holding (offer_pool + x, ask_pool - y(x)). Liquidity minted is maximal when
both sides are in pool proportion, which reduces to:

    a * x^2 + b * x + c = 0

    a = ask_pool + ask_user
    b = 2 * offer_pool * a - ask_pool * (offer_pool + offer_user) * f
    c = offer_pool * (offer_pool * ask_user - offer_user * ask_pool)

When the offer asset is over-represented, c <= 0 < a, so there is exactly one
non-negative root. It is found with Newton-Raphson over WideInt (Int512) so
every intermediate is overflow-checked.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from zapper.constants import BPS_DENOMINATOR, FEE_BPS, MAX_ITERATIONS
from zapper.safe_int import W, WideInt

logger = structlog.get_logger()


@dataclass(frozen=True)
class NewtonResult:
    """Outcome of a Newton-Raphson run.

    Attributes:
        root: Last computed x (the fixed point if converged)
        iterations: Number of Newton steps taken, including the final
            step that confirmed the fixed point
        converged: False if the iteration cap was reached first
    """

    root: int
    iterations: int
    converged: bool


@dataclass(frozen=True)
class Quadratic:
    """The equation a * x^2 + b * x + c = 0 over arbitrary-precision integers."""

    a: int
    b: int
    c: int

    @classmethod
    def from_asset_amounts(
        cls,
        offer_user: int,
        offer_pool: int,
        ask_user: int,
        ask_pool: int,
        fee_bps: int = FEE_BPS,
    ) -> Quadratic:
        """Build the optimal-swap equation from user and pool amounts.

        Args:
            offer_user: User's amount of the asset to be offered
            offer_pool: Pool depth of the asset to be offered
            ask_user: User's amount of the asset to be received
            ask_pool: Pool depth of the asset to be received
            fee_bps: Pool commission in basis points (default 30)

        Returns:
            Quadratic with coefficients as plain ints

        Raises:
            ValueError: If any amount is negative
            Overflow: If a coefficient leaves the Int512 range
        """
        for name, amount in (
            ("offer_user", offer_user),
            ("offer_pool", offer_pool),
            ("ask_user", ask_user),
            ("ask_pool", ask_pool),
        ):
            if amount < 0:
                raise ValueError(f"{name} cannot be negative: {amount}")

        ou, op, au, ap = W(offer_user), W(offer_pool), W(ask_user), W(ask_pool)

        a = ap + au
        # Commission term truncates like the pool's own Decimal math
        commission_term = ap * (op + ou) * fee_bps // BPS_DENOMINATOR
        b = op * a * 2 - commission_term
        c = op * (op * au - ou * ap)

        return cls(a=a.value, b=b.value, c=c.value)

    def value(self, x: WideInt | int) -> WideInt:
        """f(x) = a * x^2 + b * x + c"""
        wx = W(x)
        return W(self.a) * wx * wx + W(self.b) * wx + self.c

    def derivative(self, x: WideInt | int) -> WideInt:
        """f'(x) = 2 * a * x + b"""
        return W(self.a) * W(x) * 2 + self.b

    def newton(self, x_init: int = 0, max_iterations: int = MAX_ITERATIONS) -> NewtonResult:
        """Run Newton-Raphson: x_{n+1} = x_n - f(x_n) // f'(x_n).

        Stops at the first bit-exact fixed point or after max_iterations.
        Reaching the cap is not an error: the last x is returned and the
        caller's minimum-output check guards the final outcome.

        Raises:
            DivisionByZero: If f'(x_n) == 0 at some step
            Overflow: If an intermediate leaves the Int512 range
        """
        x_prev = W(x_init)
        x = x_prev
        iterations = 0
        converged = False

        for _ in range(max_iterations):
            iterations += 1
            x = x_prev - self.value(x_prev) // self.derivative(x_prev)
            if x == x_prev:
                converged = True
                break
            x_prev = x

        if not converged:
            logger.warning(
                "newton_iteration_cap_reached",
                max_iterations=max_iterations,
                last_x=x.value,
                a=self.a,
                b=self.b,
                c=self.c,
            )
        else:
            logger.debug("newton_converged", root=x.value, iterations=iterations)

        return NewtonResult(root=x.value, iterations=iterations, converged=converged)

    def solve(self, x_init: int = 0, max_iterations: int = MAX_ITERATIONS) -> int:
        """Return the (possibly non-converged) root. See newton()."""
        return self.newton(x_init, max_iterations).root
