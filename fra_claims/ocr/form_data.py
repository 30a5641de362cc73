"""Fixed value pools and the FORM-A transcript template.

The pools feed the mock recognition engine; every tuple here is
read-only module state shared by all engine instances.
"""

from .models import FamilyMember

VILLAGES = (
    "Kachargaon",
    "Mendha",
    "Bamni",
    "Navegaon",
    "Dhamangaon",
    "Pench",
    "Tadoba",
)
MALE_NAMES = (
    "Ramesh Kumar",
    "Mohan Singh",
    "Suresh Yadav",
    "Devendra Rao",
    "Prakash Gond",
)
FEMALE_NAMES = (
    "Sita Devi",
    "Geeta Bai",
    "Kamala Devi",
    "Savita Kumari",
    "Madhuri Bai",
)
CLAIMANT_NAMES = MALE_NAMES + FEMALE_NAMES
DISTRICTS = ("Seoni", "Gadchiroli", "Gondia", "Wardha", "Amravati", "Chandrapur")
STATES = ("Madhya Pradesh", "Maharashtra")
GRAM_PANCHAYATS = (
    "Gram Panchayat Kachargaon",
    "Gram Panchayat Mendha",
    "Gram Panchayat Central",
)
TEHSILS = ("Seoni", "Kurkheda", "Gondia", "Hinganghat", "Chikhaldara")

PARENT_NAME = "Late Govind Rao"
ST_CERTIFICATE = "ST Certificate No. ST/2020/1234"
SON_NAME = "Ravi Kumar"
DAUGHTER_NAME = "Meera Kumari"

# Inclusive (min_age, max_age) bands
SPOUSE_AGE_BAND = (25, 39)
SON_AGE_BAND = (8, 19)
DAUGHTER_AGE_BAND = (6, 15)

HABITATION_SHARE = 0.3
CULTIVATION_SHARE = 0.6

UNCLEAR_DISTRICT = "[UNCLEAR]"
ILLEGIBLE_SURVEY_NUMBER = "[ILLEGIBLE]"
UNCLEAR_TEXT_NOTE = "[Some text unclear due to image quality]"

_FORM_A_TEMPLATE = """\
FORM - A
CLAIM FORM FOR RIGHTS TO FOREST LAND

Claim ID: {claim_id}
1. Name of the claimant: {claimant_name}
2. Name of the spouse: {spouse_name}
3. Name of father/mother: {father_mother_name}
4. Address: {address}
5. Village: {village}
6. Gram Panchayat: {gram_panchayat}
7. Tehsil/Taluka: {tehsil_taluka}
8. District: {district}
9. (a) Scheduled Tribe: {scheduled_tribe}
   (b) Other Traditional Forest Dweller: {otfd}
10. Family members: {family}

Nature of claim on land:
1. Extent of forest land occupied
   (a) for habitation: {habitation} hectares
   (b) for self-cultivation: {cultivation} hectares
   (c) disputed lands: {disputed} hectares
   Survey number: {survey_number}
   Total area: {area} hectares

Extracted with {confidence:.1f}% confidence."""


def format_family(members: tuple[FamilyMember, ...]) -> str:
    return ", ".join(f"{m.name} ({m.age} years, {m.relation})" for m in members)


def render_form_a(
    *,
    claim_id: str,
    claimant_name: str,
    spouse_name: str,
    father_mother_name: str,
    address: str,
    village: str,
    gram_panchayat: str,
    tehsil_taluka: str,
    district: str,
    scheduled_tribe: str,
    otfd: str,
    family_members: tuple[FamilyMember, ...],
    habitation: float,
    cultivation: float,
    disputed: float,
    survey_number: str,
    area: str,
    confidence: float,
) -> str:
    """Render the human-readable transcript of a recognized FORM-A."""
    return _FORM_A_TEMPLATE.format(
        claim_id=claim_id,
        claimant_name=claimant_name,
        spouse_name=spouse_name,
        father_mother_name=father_mother_name,
        address=address,
        village=village,
        gram_panchayat=gram_panchayat,
        tehsil_taluka=tehsil_taluka,
        district=district,
        scheduled_tribe=scheduled_tribe,
        otfd=otfd,
        family=format_family(family_members),
        habitation=habitation,
        cultivation=cultivation,
        disputed=disputed,
        survey_number=survey_number,
        area=area,
        confidence=confidence,
    )
