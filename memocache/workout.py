"""A small workout generator showing why you'd want a `Cacher`.

The workout plan depends on a (simulated) expensive calculation. Depending on the intensity, the
plan needs its result zero, one or two times, so we wrap it in a `Cacher` and only ever pay for it
once.

This also has a couple of other small demos: a counting iterator and a shoe filter.
"""

from __future__ import annotations

import logging
import time

from dataclasses import dataclass
from typing import Iterator

from memocache.cacher import Cacher
from memocache.script_utils import _cli_runner

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 2.0  # seconds the expensive calculation takes
HIGH_INTENSITY = 25  # at or above this, we run instead of doing pushups/situps
BREAK_NUMBER = 3  # random number that means take a break on high-intensity days
DEFAULT_INTENSITY = 10
DEFAULT_RANDOM_NUMBER = 7

def simulated_expensive_calculation(intensity: int, delay: float=DEFAULT_DELAY) -> int:
    """Pretends to do a lot of work (by sleeping for `delay` seconds) and returns `intensity`."""
    logger.info('Running expensive calculation...')
    time.sleep(delay)
    return intensity

def generate_workout(intensity: int=DEFAULT_INTENSITY,
                     random_number: int=DEFAULT_RANDOM_NUMBER,
                     delay: float=DEFAULT_DELAY) -> list[str]:
    """Generates (and prints) the workout plan for the given `intensity`.

    The expensive calculation runs at most once, no matter how many lines need its result. On
    high-intensity days where `random_number` is `BREAK_NUMBER`, it doesn't run at all.

    Returns the lines of the plan.
    """
    cache = Cacher(lambda n: simulated_expensive_calculation(n, delay=delay), name='workout')
    if intensity < HIGH_INTENSITY:
        lines = [
            f'Today, do {cache.value(intensity)} pushups!',
            f'Next, do {cache.value(intensity)} situps!',
        ]
    elif random_number == BREAK_NUMBER:
        lines = ['Take a break today! Remember to stay hydrated!']
    else:
        lines = [f'Today, run for {cache.value(intensity)} minutes!']
    logger.debug(f'Workout cache stats: {cache.get_stats()}')
    for line in lines:
        print(line)
    return lines


class Counter:
    """Iterator that counts from 1 up to `limit` (inclusive)."""
    def __init__(self, limit: int=5):
        self.limit = limit
        self.count = 0

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        if self.count < self.limit:
            self.count += 1
            return self.count
        raise StopIteration


@dataclass
class Shoe:
    size: int
    style: str


def shoes_in_my_size(shoes: list[Shoe], size: int) -> list[Shoe]:
    """Returns the shoes with the given `size`, in their original order."""
    return [shoe for shoe in shoes if shoe.size == size]


def workout(intensity: int=DEFAULT_INTENSITY,
            random_number: int=DEFAULT_RANDOM_NUMBER,
            delay: float=DEFAULT_DELAY) -> None:
    """Prints today's workout"""
    generate_workout(intensity, random_number, delay=delay)
    print('Done!')

def count(limit: int=5) -> None:
    """Prints the numbers from a `Counter`, plus one.

    This is the usual map-over-an-iterator example (`[1, 2, 3]` mapped through `x + 1`), except the
    numbers come from our own `Counter` instead of a fixed list, so `limit=3` prints 2, 3 and 4.
    """
    for i in (x + 1 for x in Counter(limit)):
        print(f'iter: {i}')

def shoes(size: int=1) -> None:
    """Prints the sample shoes in the given `size`"""
    sample = [
        Shoe(1, 'white'),
        Shoe(1, 'black'),
        Shoe(2, 'orange'),
        Shoe(3, 'blue'),
    ]
    for shoe in shoes_in_my_size(sample, size):
        print(shoe)

def _setup_logging(verbose: bool=False, **kwargs) -> dict:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    return kwargs

def main(argv: list[str]|None=None) -> None:
    _cli_runner([workout, count, shoes],
                description='Workout generator and other memoization demos',
                pre_func=_setup_logging,
                argv=argv,
                intensity=dict(type=int, help='How hard a workout to generate'),
                random_number=dict(type=int, help='Random number for high-intensity days'),
                delay=dict(type=float, help='Seconds the expensive calculation takes'),
                size=dict(type=int, help='Shoe size to filter for'),
                limit=dict(type=int, help='What to count up to'),
                verbose=dict(action='store_true', help='Log at debug level'))


if __name__ == '__main__':
    main()
