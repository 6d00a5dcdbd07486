"""
Organization records for Canadian film and television production.

Performers, creative leadership, writers, camera guilds, technical
locals and Teamsters transportation locals.
"""
from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from ..models import MembershipTier, Organization, OrganizationRegistry, TargetMetric


def _tier(name: str, metric: TargetMetric, value: int, description: str) -> MembershipTier:
    return MembershipTier(
        name=name,
        target_metric=metric,
        target_value=Decimal(value),
        description=description,
    )


DAYS = TargetMetric.DAYS
CREDITS = TargetMetric.CREDITS


ORGANIZATIONS: tuple[Organization, ...] = (
    # -------------------------------------------------------------------------
    # Performers
    # -------------------------------------------------------------------------
    Organization(
        id="u-actra",
        name="ACTRA",
        description=(
            "National baseline for performers (except BC). "
            "Authority for Actors, Background, and Stunts."
        ),
        dues_rate=Decimal("0.0225"),
        application_fee=Decimal("75"),
        benefits=(
            "Health Insurance",
            "Retirement Plan",
            "Collective Bargaining",
            "Legal Assistance",
        ),
        membership_tiers=(
            _tier("Apprentice", CREDITS, 1, "Single qualifying credit."),
            _tier("Full Member", CREDITS, 3, "Three qualifying credits."),
        ),
        application_steps=(
            "Submit qualifying credits (Voucher/Contract)",
            "Payment of permit or initiation fee",
            "Attend professional orientation session",
        ),
    ),
    Organization(
        id="u-ubcp",
        name="UBCP/ACTRA",
        description="Autonomous BC branch representing performers in British Columbia.",
        dues_rate=Decimal("0.025"),
        application_fee=Decimal("100"),
        benefits=("BC Health & Welfare", "Retirement Plan"),
        membership_tiers=(
            _tier("Full Member", CREDITS, 3, "BC Standard."),
        ),
    ),
    # -------------------------------------------------------------------------
    # Creative leadership and writers
    # -------------------------------------------------------------------------
    Organization(
        id="u-dgc",
        name="DGC",
        description=(
            "Directors Guild of Canada. Creative authority for Directors, ADs, "
            "PMs, Locations, and Editors."
        ),
        dues_rate=Decimal("0.02"),
        application_fee=Decimal("500"),
        benefits=(
            "National Pension Plan",
            "DGC Health & Welfare",
            "Creative Rights Protection",
        ),
        membership_tiers=(
            _tier("Associate", DAYS, 150, "Entry level permit status."),
            _tier("Member", DAYS, 300, "Full professional membership."),
        ),
        jurisdiction_notes=(
            "DGC operates via District Councils (BC, Alberta, Ontario, Atlantic, etc). "
            "Rules are largely national but local council dues vary."
        ),
        application_steps=(
            "Review Department-specific requirements",
            "Submit proof of residency and work days",
            "Pay District Council initiation fee",
            "Orientation and Gap Training completion",
        ),
    ),
    Organization(
        id="u-wgc",
        name="WGC",
        description="Writers Guild of Canada. Authority for screenwriters and story editors.",
        dues_rate=Decimal("0.02"),
        application_fee=Decimal("350"),
        membership_tiers=(
            _tier("Full Member", CREDITS, 1, "Produced Credit."),
        ),
    ),
    # -------------------------------------------------------------------------
    # Technical locals
    # -------------------------------------------------------------------------
    Organization(
        id="u-873",
        name="IATSE 873",
        description=(
            "Toronto technical local. Jurisdiction for Script Supervisors and "
            "primary Tech Depts in the GTA."
        ),
        dues_rate=Decimal("0.045"),
        application_fee=Decimal("200"),
        benefits=("Local 873 Health Plan", "Group RRSP", "Technical Training Labs"),
        membership_tiers=(
            _tier("Permit", DAYS, 30, "Initial work eligibility."),
            _tier("Member", DAYS, 90, "Full voting status."),
        ),
        application_steps=(
            "30-60 Days worked in department",
            "Submit resume and letters of recommendation",
            "Interview with Department Committee",
        ),
    ),
    Organization(
        id="u-nabet",
        name="NABET 700-M UNIFOR",
        description=(
            "Ontario technical guild. Competitive jurisdiction for Tech, Craft, "
            "and Transportation."
        ),
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("150"),
        membership_tiers=(
            _tier("Member", DAYS, 30, "Ontario Tech Standard."),
        ),
    ),
    Organization(
        id="u-891",
        name="IATSE 891",
        description="BC/Yukon technical local. Jurisdiction for Tech, Sound, and First Aid.",
        dues_rate=Decimal("0.035"),
        application_fee=Decimal("150"),
        membership_tiers=(
            _tier("Member", DAYS, 90, "BC Tech Standard."),
        ),
    ),
    Organization(
        id="u-212",
        name="IATSE 212",
        description="Alberta Mixed Local. Covers Tech, Sound, Art Dept, and Picture Editing.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("100"),
        membership_tiers=(
            _tier("Member", DAYS, 60, "Alberta Standard."),
        ),
    ),
    Organization(
        id="u-856",
        name="IATSE 856",
        description="Manitoba Local. Jurisdiction for Tech, Sound, FACS, and Transportation.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("100"),
        jurisdiction_notes="FACS (First Aid / Craft Service) is a unique hybrid department in MB.",
        membership_tiers=(
            _tier("Member", DAYS, 60, "Manitoba Standard."),
        ),
    ),
    Organization(
        id="u-849",
        name="IATSE 849",
        description="Atlantic Technical Local. Covers all tech, Sound, and Transportation.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("100"),
        membership_tiers=(
            _tier("Member", DAYS, 60, "Atlantic Standard."),
        ),
    ),
    Organization(
        id="u-411",
        name="IATSE 411",
        description="Ontario specialized local for Coordinators and Craft Service.",
        dues_rate=Decimal("0.035"),
        application_fee=Decimal("150"),
        benefits=("Health & Welfare", "Contract Protection", "Industry Networking"),
        membership_tiers=(
            _tier("Member", DAYS, 120, "Standard membership."),
        ),
        application_steps=(
            "Proof of 120 days in production office (for PC)",
            "Reference letters from existing members",
            "Membership committee review",
        ),
    ),
    # -------------------------------------------------------------------------
    # Camera guilds
    # -------------------------------------------------------------------------
    Organization(
        id="u-667",
        name="IATSE 667",
        description="Cinematographers Guild (Eastern). Camera authority in ON, QC, and Atlantic.",
        dues_rate=Decimal("0.04"),
        application_fee=Decimal("300"),
        benefits=("Camera Training", "Equipment Insurance Access", "Health & Dental"),
        membership_tiers=(
            _tier("Trainee", DAYS, 60, "Camera Trainee program."),
        ),
        application_steps=(
            "Submit portfolio and work history",
            "Verification of specialized technical training",
            "Review by National Executive Board",
        ),
    ),
    Organization(
        id="u-669",
        name="IATSE 669",
        description=(
            "Cinematographers Guild (Western). Camera authority in BC, AB, SK, MB, "
            "and Territories."
        ),
        dues_rate=Decimal("0.04"),
        application_fee=Decimal("300"),
        benefits=("Technical Training", "Health & Welfare", "Contract Enforcement"),
        membership_tiers=(
            _tier("Trainee", DAYS, 60, "Camera Trainee program."),
        ),
        application_steps=(
            "Residency in Western Canada/Yukon",
            "Relevant work experience in camera department",
            "Safety training certification",
        ),
    ),
    Organization(
        id="u-aqtis",
        name="AQTIS 514 IATSE",
        description="Quebec Mega-Local for all technical and camera departments.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("250"),
        residency_rule="Strict Quebec provincial residency required.",
        benefits=("Group Insurance", "RRSP Transfers", "Collective Agreement Enforcement"),
        membership_tiers=(
            _tier("Permittee", DAYS, 90, "Quebec Standard."),
        ),
        application_steps=(
            'Attend "Introduction to the Union" course',
            "Accumulate department-specific work days (90-200)",
            "Submit proof of SIN and DOB",
        ),
    ),
    # -------------------------------------------------------------------------
    # Transportation
    # -------------------------------------------------------------------------
    Organization(
        id="u-t155",
        name="Teamsters 155",
        description="Transportation and Security in British Columbia.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("200"),
        membership_tiers=(
            _tier("Member", DAYS, 100, "BC Transpo."),
        ),
    ),
    Organization(
        id="u-t938",
        name="Teamsters 938",
        description="Transportation and Logistics in Ontario.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("200"),
        membership_tiers=(
            _tier("Member", DAYS, 100, "Ontario Transpo."),
        ),
    ),
    Organization(
        id="u-t362",
        name="Teamsters 362",
        description="Transportation and Security in Alberta.",
        dues_rate=Decimal("0.03"),
        application_fee=Decimal("200"),
        membership_tiers=(
            _tier("Member", DAYS, 100, "AB Transpo."),
        ),
    ),
)


@lru_cache(maxsize=1)
def default_registry() -> OrganizationRegistry:
    """Registry of all compiled-in organizations."""
    return OrganizationRegistry.from_records(ORGANIZATIONS)
