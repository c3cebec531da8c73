from typing import Callable, NamedTuple

MAX_ITER = 100
TOLERANCE = 1e-6
MAX_EXPANSIONS = 60


class Solution(NamedTuple):
    """Best available root of a bracketed search.

    `converged` is False when the iteration ceiling was reached before the
    tolerance was met; `root` is then the midpoint of the final bracket.
    """
    root: float
    converged: bool
    iterations: int


def bisect(f: Callable[[float], float],
           lower: float,
           upper: float,
           target: float = 0.0,
           tolerance: float = TOLERANCE,
           max_iter: int = MAX_ITER,
           increasing: bool = True) -> Solution:
    """Finds x in [lower, upper] with f(x) = target by bisection.

    Args:
        f (Callable): Monotone function of one variable.
        lower (float): Lower end of the bracket.
        upper (float): Upper end of the bracket.
        target (float, optional): Value sought. Defaults to 0.0 (zero crossing).
        tolerance (float, optional): Stop once |f(mid) - target| < tolerance. Defaults to 1e-6.
        max_iter (int, optional): Iteration ceiling. Defaults to 100.
        increasing (bool, optional): Whether f increases with x. Defaults to True.

    Returns:
        Solution: Root, convergence flag and number of iterations used.
    """
    for i in range(max_iter):
        mid = (lower + upper) / 2
        value = f(mid)

        if abs(value - target) < tolerance:
            return Solution(root=mid, converged=True, iterations=i + 1)

        if (value < target) == increasing:
            lower = mid
        else:
            upper = mid

    return Solution(root=(lower + upper) / 2, converged=False, iterations=max_iter)


def expand_bracket(f: Callable[[float], float],
                   lower: float,
                   upper: float,
                   target: float = 0.0,
                   max_expansions: int = MAX_EXPANSIONS) -> tuple:
    """Doubles the upper bound of an increasing function until it encloses target.

    Returns:
        tuple: (lower, upper). If the target is still not enclosed after
        `max_expansions` doublings the last bracket is returned as is.
    """
    for _ in range(max_expansions):
        if f(upper) >= target:
            break
        lower, upper = upper, 2.0 * upper

    return lower, upper
