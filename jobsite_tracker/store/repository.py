from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..data.samples import SAMPLE_JOB_SITES
from ..models.config_models import DEFAULT_STORAGE_KEY
from ..models.jobsite import JobSite
from .backends import KeyValueBackend, StorageError

"""Job-site collection store.

The repository owns the in-memory collection and pushes the whole collection
to the backend on every change (load / save / replace_all, plus the
add_job_sites and clear conveniences used by the import and reset flows).
Records are never mutated in place; every change replaces the collection.
"""

__all__ = [
    "JobSiteRepository",
]

logger = logging.getLogger(__name__)


class JobSiteRepository:
    """Persisted job-site collection backed by a key-value slot."""

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = DEFAULT_STORAGE_KEY,
        seed: Sequence[JobSite] = SAMPLE_JOB_SITES,
    ) -> None:
        self.backend = backend
        self.key = key
        self.seed: tuple[JobSite, ...] = tuple(seed)
        self._job_sites: list[JobSite] = list(self.seed)

    @property
    def job_sites(self) -> list[JobSite]:
        return list(self._job_sites)

    def load(self) -> list[JobSite]:
        """Load the stored collection; the seed records when nothing is stored.

        Raises:
            StorageError: stored content is not a JSON array of job sites
        """
        stored = self.backend.get(self.key)
        if not stored:
            logger.debug("store: nothing stored, using sample data")
            self._job_sites = list(self.seed)
            return self.job_sites
        try:
            raw = json.loads(stored)
            if not isinstance(raw, list):
                raise StorageError(f"stored value for {self.key!r} is not a list")
            records = [JobSite.from_dict(item) for item in raw]
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError, ValueError) as e:
            raise StorageError(f"invalid stored job sites: {e}") from e
        logger.debug(f"store: loaded {len(records)} job sites")
        self._job_sites = records
        return self.job_sites

    def save(self, job_sites: Sequence[JobSite]) -> bool:
        """Persist ``job_sites`` and verify the write by reading it back.

        Returns:
            True when the stored collection has the expected size
        """
        payload = json.dumps([job.to_dict() for job in job_sites], ensure_ascii=False)
        logger.debug(f"store: saving {len(job_sites)} job sites ({len(payload)} chars)")
        self.backend.set(self.key, payload)

        verification = self.backend.get(self.key)
        ok = verification is not None and len(json.loads(verification)) == len(job_sites)
        if not ok:
            logger.warning(f"store: verification failed for key {self.key!r}")
        return ok

    def replace_all(self, job_sites: Sequence[JobSite]) -> bool:
        self._job_sites = list(job_sites)
        return self.save(self._job_sites)

    def add_job_sites(self, new_job_sites: Sequence[JobSite]) -> bool:
        logger.debug(f"store: adding {len(new_job_sites)} to {len(self._job_sites)} job sites")
        return self.replace_all([*self._job_sites, *new_job_sites])

    def clear(self) -> bool:
        """Reset the collection to the sample data."""
        logger.info("store: resetting job sites to sample data")
        return self.replace_all(self.seed)
