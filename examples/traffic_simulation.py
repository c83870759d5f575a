"""
Traffic simulation for the IP store

Drives a PulleyIPStore with a hot set of busy clients hidden in a long tail
of one-off visitors, then checks the leaderboard against exact counts
"""
from collections import Counter
from ipaddress import IPv4Address
import random
import sys
import time

from ipstore.core.store import PulleyIPStore


def random_address(rng: random.Random) -> IPv4Address:
    return IPv4Address(rng.getrandbits(32))


def generate_traffic(
    events: int,
    hot_set: int = 200,
    tail: int = 100_000,
    hot_ratio: float = 0.8,
    seed: int = 42,
):
    """
    Generate a stream of client addresses

    Args:
        events: Number of requests to generate
        hot_set: Number of busy clients
        tail: Number of long-tail clients
        hot_ratio: Share of requests coming from the hot set
        seed: Random seed

    Yields:
        One IPv4Address per request
    """
    rng = random.Random(seed)
    hot = [random_address(rng) for _ in range(hot_set)]
    cold = [random_address(rng) for _ in range(tail)]

    # Skewed weights so the hot set has a well-defined order
    weights = [1.0 / (rank + 1) for rank in range(hot_set)]

    for _ in range(events):
        if rng.random() < hot_ratio:
            yield rng.choices(hot, weights=weights)[0]
        else:
            yield rng.choice(cold)


def example_1_leaderboard(events: int):
    """
    Example 1: Feed requests and show the current leaders

    Use case: "Which clients are hammering us right now?"
    """
    print("=" * 60)
    print(f"Example 1: Top-K Leaderboard ({events:,} requests)")
    print("=" * 60)

    store = PulleyIPStore(k=100)
    exact = Counter()

    start = time.perf_counter()
    for address in generate_traffic(events):
        store.request_handled(address)
        exact[address] += 1
    elapsed = time.perf_counter() - start

    stats = store.stats()
    print(f"  Distinct clients: {stats['distinct']:,}")
    print(f"  Total requests:   {stats['total']:,}")
    print(f"  Throughput:       {events / elapsed:,.0f} requests/s")
    print(f"  Threshold:        {stats['threshold']}")

    print("\n  Top 10:")
    for rank, (address, count) in enumerate(store.ranked()[:10], start=1):
        print(f"    {rank:>3}. {str(address):<16} {count:>8,}")

    expected = sorted(count for _, count in exact.most_common(store.k))
    actual = sorted(count for _, count in store.ranked())
    print(f"\n  Matches exact Top-{store.k} counts: {expected == actual}")
    print()


def example_2_clear(events: int):
    """
    Example 2: Periodic reset to bound memory

    Use case: Per-interval leaderboards without unbounded growth
    """
    print("=" * 60)
    print("Example 2: Periodic Reset")
    print("=" * 60)

    store = PulleyIPStore(k=10)
    interval = max(events // 4, 1)

    for index, address in enumerate(generate_traffic(events, seed=7), start=1):
        store.request_handled(address)
        if index % interval == 0:
            leader, count = store.ranked()[0]
            print(f"  Interval {index // interval}: leader {leader} with {count:,} requests, "
                  f"{store.stats()['distinct']:,} distinct")
            store.clear()

    print()


if __name__ == "__main__":
    events = int(sys.argv[1]) if len(sys.argv) > 1 else 1_000_000

    example_1_leaderboard(events)
    example_2_clear(events)

    print("=" * 60)
    print("All examples completed!")
    print("=" * 60)
