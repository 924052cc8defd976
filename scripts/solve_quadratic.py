"""Solve the optimal-swap equation for raw user and pool amounts.

Prints the coefficients, every Newton step and the resulting offer amount,
which is handy when checking a quote by hand.

Usage:
    python -m scripts.solve_quadratic --offer-user 100000000000 \
        --offer-pool 118070429547232 --ask-user 0 --ask-pool 1451993415113
"""

import argparse

from zapper.constants import FEE_BPS, MAX_ITERATIONS
from zapper.math.quadratic import Quadratic
from zapper.safe_int import W


def print_steps(quadratic: Quadratic, max_iterations: int) -> None:
    """Replay Newton-Raphson from 0, printing x and f(x) at each step."""
    x_prev = W(0)
    for i in range(max_iterations):
        x = x_prev - quadratic.value(x_prev) // quadratic.derivative(x_prev)
        print(f"  step {i + 1:2d}: x = {x.value}, f(x) = {quadratic.value(x).value}")
        if x == x_prev:
            return
        x_prev = x


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve the optimal-swap quadratic")
    parser.add_argument("--offer-user", type=int, required=True, help="User amount of the offer asset")
    parser.add_argument("--offer-pool", type=int, required=True, help="Pool depth of the offer asset")
    parser.add_argument("--ask-user", type=int, default=0, help="User amount of the ask asset")
    parser.add_argument("--ask-pool", type=int, required=True, help="Pool depth of the ask asset")
    parser.add_argument("--fee-bps", type=int, default=FEE_BPS, help="Pool commission in bps")
    parser.add_argument("--max-iterations", type=int, default=MAX_ITERATIONS)
    parser.add_argument("--verbose", "-v", action="store_true", help="Print every step")
    args = parser.parse_args()

    quadratic = Quadratic.from_asset_amounts(
        offer_user=args.offer_user,
        offer_pool=args.offer_pool,
        ask_user=args.ask_user,
        ask_pool=args.ask_pool,
        fee_bps=args.fee_bps,
    )
    print(f"a = {quadratic.a}")
    print(f"b = {quadratic.b}")
    print(f"c = {quadratic.c}")

    if args.verbose:
        print_steps(quadratic, args.max_iterations)

    result = quadratic.newton(max_iterations=args.max_iterations)
    status = "converged" if result.converged else "iteration cap reached"
    print(f"offer amount = {result.root} ({status} after {result.iterations} iterations)")


if __name__ == "__main__":
    main()
