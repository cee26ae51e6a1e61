from __future__ import annotations

from ..models.jobsite import JobSite, Stages

"""Built-in sample job sites, shown until something is imported or after a reset."""

__all__ = [
    "SAMPLE_JOB_SITES",
]

SAMPLE_JOB_SITES: tuple[JobSite, ...] = (
    JobSite(
        id="sample-1",
        job_name="Downtown Office Complex",
        job_type="Commercial",
        location="123 Main St, Downtown",
        coordinator="Sarah Johnson",
        contractor="BuildRight Construction",
        due_date="2025-12-31",
        notes="12-story office tower with underground parking",
        stages=Stages(True, True, False, False, False),
        created_at="2025-01-15",
        updated_at="2025-01-15",
    ),
    JobSite(
        id="sample-2",
        job_name="Riverside Apartments",
        job_type="Residential",
        location="45 River Rd",
        coordinator="Michael Chen",
        contractor="Urban Homes LLC",
        due_date="2025-09-30",
        notes="",
        stages=Stages(True, True, True, True, False),
        created_at="2025-02-01",
        updated_at="2025-02-01",
    ),
    JobSite(
        id="sample-3",
        job_name="Eastside Distribution Center",
        job_type="Industrial",
        location="900 Logistics Pkwy",
        coordinator="Priya Patel",
        contractor="Steelframe Builders",
        due_date="2026-03-15",
        notes="Cold storage wing in phase two",
        stages=Stages(True, False, False, False, False),
        created_at="2025-03-10",
        updated_at="2025-03-10",
    ),
    JobSite(
        id="sample-4",
        job_name="Harbor Bridge Repair",
        job_type="Infrastructure",
        location="Harbor Bridge, Pier 4",
        coordinator="David Okafor",
        contractor="Coastal Civil Works",
        due_date="2025-06-30",
        notes="",
        stages=Stages(True, True, True, True, True),
        created_at="2024-11-20",
        updated_at="2024-11-20",
    ),
    JobSite(
        id="sample-5",
        job_name="Heritage Library Renovation",
        job_type="Renovation",
        location="12 Elm St",
        coordinator="Emma Rossi",
        contractor="Restore & Co",
        due_date="2026-01-20",
        notes="Preserve original facade",
        stages=Stages(),
        created_at="2025-04-02",
        updated_at="2025-04-02",
    ),
)
