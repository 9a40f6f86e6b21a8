"""Encode and decode the external id that links a check run to a CI job"""

from typing import NamedTuple, Optional

from src.models import BuildInfo, JobInfo

SEPARATOR = "/"


class ExternalId(NamedTuple):
    """The {domain}/{build_id}/{job_id} triple stored in the check run external_id"""

    domain: str
    build_id: str
    job_id: str

    @classmethod
    def for_job(cls, build_info: BuildInfo, job: JobInfo) -> "ExternalId":
        """Return the external id of the job in the build"""
        return cls(build_info.domain, build_info.id, job.job_id)

    @classmethod
    def decode(cls, external_id: Optional[str]) -> Optional["ExternalId"]:
        """
        Decode a check run external_id.
        :param external_id: The external_id as received from GitHub.
        :return: The ExternalId or None if it is empty or not in the {domain}/{build_id}/{job_id} format.
        """
        if not external_id:
            return None
        parts = external_id.split(SEPARATOR)
        if len(parts) != 3:
            return None
        return cls(*parts)

    def encode(self) -> str:
        """Return the external_id to send to GitHub"""
        return SEPARATOR.join(self)
