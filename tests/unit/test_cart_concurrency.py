"""The cart is shared by FastAPI's worker threads; operations must not interleave."""
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from shopcart.domain.cart import Cart

WORKERS = 8
ADDS_PER_WORKER = 200


def test_concurrent_merges_lose_no_quantity():
    cart = Cart()

    def worker(_):
        for _ in range(ADDS_PER_WORKER):
            cart.add("123", "Widget", 1, 1)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(worker, range(WORKERS)))

    assert cart.count() == 1
    assert cart.find("123").quantity == WORKERS * ADDS_PER_WORKER


def test_concurrent_adds_and_removes_keep_total_consistent():
    cart = Cart()

    def worker(n):
        pid = f"p{n}"
        for _ in range(ADDS_PER_WORKER):
            cart.add(pid, pid, 2, 1)
            cart.remove(pid)
        cart.add(pid, pid, 2, 1)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(worker, range(WORKERS)))

    assert cart.count() == WORKERS
    assert cart.total() == Decimal(2 * WORKERS)
