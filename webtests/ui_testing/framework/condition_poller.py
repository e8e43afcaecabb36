# ================================================================================
# Condition Poller Module
# ================================================================================
#
# Bounded polling for "does this condition become true before a deadline".
#
# This is the suppressing poll: any exception raised by a probe during an
# attempt means "not yet", never "abort". Only the deadline ends the poll, and
# a missed deadline is reported as False rather than raised.
#
# The fail-fast counterpart lives in element.py: batch operations there
# propagate the first error immediately.
#
# Usage:
#   found = wait_until(lambda root: root.query_selector("#title"), timeout=5, root=page)
#   ready = wait_until(check_fn, scenario="navigation")
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import allure
from loguru import logger


@dataclass
class PollConfig:
    """
    Configuration for a poll.

    Attributes:
        timeout: Total time budget in seconds
        poll_interval: Pause between attempts in seconds
    """
    timeout: float = 10.0
    poll_interval: float = 0.5


# Poll budgets used by the browser session
POLL_SCENARIOS: Dict[str, PollConfig] = {
    # element_will_exist / element_is_visible
    "default": PollConfig(),

    # Landmark check after navigate()
    "navigation": PollConfig(timeout=3.0),
}


def get_poll_config(scenario: str) -> PollConfig:
    """
    Get poll configuration for a scenario.

    Args:
        scenario: Scenario name (e.g., "navigation")

    Returns:
        PollConfig for the scenario, or default if not found
    """
    return POLL_SCENARIOS.get(scenario, POLL_SCENARIOS["default"])


def wait_until(
    probe: Callable[[Any], Any],
    timeout: Optional[float] = None,
    root: Any = None,
    poll_interval: Optional[float] = None,
    description: str = "condition",
    scenario: str = "default",
) -> bool:
    """
    Poll a probe until it reports success or the deadline passes.

    Any result other than None or False is success, so a probe may return
    the thing it found (a handle, 0, an empty string) rather than a bool.

    The probe receives ``root`` on every call and must be safe to call
    repeatedly. Exceptions from the probe are treated as a failed attempt.

    Args:
        probe: Callable taking the search root, returning None or False while not ready
        timeout: Time budget in seconds (overrides the scenario)
        root: Search root passed through to the probe
        poll_interval: Pause between attempts in seconds (overrides the scenario)
        description: Human-readable description for logging
        scenario: Predefined scenario name for the budget

    Returns:
        True if the probe succeeded before the deadline, False otherwise
    """
    config = get_poll_config(scenario)
    timeout = config.timeout if timeout is None else timeout
    poll_interval = config.poll_interval if poll_interval is None else poll_interval

    start_time = time.monotonic()
    deadline = start_time + timeout
    attempt = 0

    while True:
        attempt += 1

        try:
            result = probe(root)
            if result is not None and result is not False:
                logger.debug(
                    f"Condition met after {attempt} attempts "
                    f"({time.monotonic() - start_time:.2f}s): {description}"
                )
                return True
            logger.debug(f"Attempt {attempt}: {description} not met yet")
        except Exception as e:
            logger.debug(f"Attempt {attempt}: {description} raised {type(e).__name__}: {e}")

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug(
                f"Gave up after {attempt} attempts ({timeout}s): {description}"
            )
            return False

        time.sleep(min(poll_interval, remaining))


@allure.step("Wait for: {description}")
def wait_for(
    probe: Callable[[Any], Any],
    description: str,
    timeout: Optional[float] = None,
    root: Any = None,
    scenario: str = "default",
) -> bool:
    """Reported variant of wait_until, shown as a step in Allure."""
    return wait_until(
        probe,
        timeout=timeout,
        root=root,
        description=description,
        scenario=scenario,
    )


__all__ = [
    "PollConfig",
    "POLL_SCENARIOS",
    "get_poll_config",
    "wait_until",
    "wait_for",
]
