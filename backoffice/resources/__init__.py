"""Per-resource repositories built on the generic `Repository`."""

from backoffice.resources.cities import CityRepository
from backoffice.resources.contacts import ContactRepository
from backoffice.resources.deals import DealRepository
from backoffice.resources.enquiries import EnquiryRepository
from backoffice.resources.jobs import JobRepository
from backoffice.resources.tasks import TaskRepository

__all__ = [
    "CityRepository",
    "ContactRepository",
    "DealRepository",
    "EnquiryRepository",
    "JobRepository",
    "TaskRepository",
]
