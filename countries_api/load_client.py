# countries_api/load_client.py
import argparse, threading, time
from dataclasses import dataclass
from typing import List

import requests

from .models import Country, Currency


@dataclass
class BlastResult:
    elapsed: float
    codes: List[int]
    stored: int


def make_country(i: int) -> Country:
    return Country(
        name=f"Country-{i}",
        alpha2_code=f"C{i}",
        capital=f"Capital-{i}",
        currencies=(Currency(code="EUR", name="Euro", symbol="E"),),
    )


def post_country(base_url: str, country: Country, timeout: float = 5.0) -> int:
    r = requests.post(
        f"{base_url}/countries",
        json=country.to_dict(),
        headers={"content-type": "application/json"},
        timeout=timeout,
    )
    return r.status_code


def blast(base_url: str, n: int = 10, timeout: float = 5.0) -> BlastResult:
    """POST n distinct countries from n threads, then count how many the server kept."""
    base_url = base_url.rstrip("/")
    t0 = time.time()
    codes: List[int] = [0] * n

    def worker(i):
        try:
            codes[i] = post_country(base_url, make_country(i), timeout)
        except requests.RequestException:
            codes[i] = -1

    th = [threading.Thread(target=worker, args=(i,), daemon=True) for i in range(n)]
    [t.start() for t in th]; [t.join() for t in th]
    elapsed = time.time() - t0

    r = requests.get(f"{base_url}/countries", timeout=timeout)
    r.raise_for_status()
    names = {c["name"] for c in r.json()}
    stored = sum(1 for i in range(n) if f"Country-{i}" in names)
    return BlastResult(elapsed, codes, stored)


def main():
    ap = argparse.ArgumentParser(description="Concurrent POST load against /countries")
    ap.add_argument("--url", default="http://127.0.0.1:8080")
    ap.add_argument("--n", type=int, default=50)
    a = ap.parse_args()
    res = blast(a.url, a.n)
    ok = sum(1 for c in res.codes if c == 200)
    print(f"Done {a.n} in {res.elapsed:.2f}s (200 OK: {ok}/{a.n}, stored: {res.stored}/{a.n})")


if __name__ == "__main__":
    main()
