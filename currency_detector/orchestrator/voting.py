import asyncio
import inspect
from collections import Counter
from typing import Awaitable, Callable, Union

from currency_detector.orchestrator.contracts import ClassificationResult, VoteTally

# capture + extract + classify for one sample; may be sync or async
Sampler = Callable[[], Union[ClassificationResult, Awaitable[ClassificationResult]]]


def plurality(tally: VoteTally) -> tuple[int, int]:
    """Entry with the highest count; the first-inserted entry wins a tie."""
    if not tally:
        raise ValueError("empty tally")
    # most_common sorts stably, so equal counts keep insertion order
    return tally.most_common(1)[0]


async def vote(
    sample: Sampler,
    count: int = 5,
    delay_s: float = 0.15,
    sleep=asyncio.sleep,
) -> tuple[VoteTally, list[ClassificationResult]]:
    """Run `sample` `count` times in sequence and tally the denominations.

    Any exception from a sample aborts the whole vote; a partial tally is
    never returned.
    """
    if count < 1:
        raise ValueError("count must be >= 1")

    tally: VoteTally = Counter()
    results: list[ClassificationResult] = []
    for index in range(count):
        if index > 0 and delay_s > 0:
            await sleep(delay_s)
        result = sample()
        if inspect.isawaitable(result):
            result = await result
        results.append(result)
        tally[result.denomination] += 1
    return tally, results
