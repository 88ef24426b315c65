"""
providers.py — Maze & Solver Providers
========================================
The race never builds mazes or runs searches itself; it asks the maze
server (port 8081 by default) and consumes
the answers.

Any object with the right method is a provider:

    maze provider   : fetch_grid()   -> GridModel
    solver provider : solve(AlgoId)  -> ResultSummary

Both HTTP adapters share one requests.Session and turn every way a call
can go wrong — connection error, non-2xx status, undecodable JSON,
wrongly shaped payload — into TransportFailure.  Nothing is retried,
and no timeout is applied unless one is configured.
"""

import logging
from typing import Any, Optional

import requests

from algorithms import AlgoId, get_algorithm
from errors import PayloadError, TransportFailure
from grid import GridModel, ResultSummary

logger = logging.getLogger(__name__)


class HttpProvider:
    """
    Attributes:
        base_url : Server root, e.g. "http://localhost:8081".
        timeout  : Seconds per request, or None to wait indefinitely.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout  = timeout
        self.http     = session or requests.Session()

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.http.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            # ValueError from .json() is a RequestException subclass in requests >= 2.27
            logger.warning("GET %s failed: %s", url, e)
            raise TransportFailure(f"GET {url} failed: {e}") from e
        except ValueError as e:
            logger.warning("GET %s returned invalid JSON: %s", url, e)
            raise TransportFailure(f"GET {url} returned invalid JSON") from e


class HttpMazeProvider(HttpProvider):
    def fetch_grid(self) -> GridModel:
        data = self._get_json("/api/generate")
        try:
            return GridModel.from_dict(data)
        except PayloadError:
            logger.warning("maze payload rejected", exc_info=True)
            raise


class HttpSolverProvider(HttpProvider):
    def solve(self, algo: AlgoId) -> ResultSummary:
        info = get_algorithm(algo)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo}")
        data = self._get_json(f"/api/solve/{info.endpoint}")
        try:
            return ResultSummary.from_dict(algo, data)
        except PayloadError:
            logger.warning("%s result payload rejected", info.label, exc_info=True)
            raise
