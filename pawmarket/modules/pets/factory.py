from uuid import UUID

from pawmarket.database.models import Breed, City, Pet, PetImage, PetType
from pawmarket.utils.slugs import short_token, slugify

PET_FIELDS = (
    "name",
    "gender",
    "date_of_birth",
    "age_years",
    "age_months",
    "color",
    "size_category",
    "weight",
    "is_neutered",
    "is_vaccinated",
    "vaccination_details",
    "temperament",
    "fun_facts",
    "rescue_story",
    "description",
)


def build_pet_images(image_urls: list[str]) -> list[PetImage]:
    """First image is the primary one."""
    return [
        PetImage(url=url, thumb_url=url, is_primary=index == 0, display_order=index)
        for index, url in enumerate(image_urls)
    ]


def build_pet(
    owner_id: UUID,
    data: dict,
    pet_type: PetType,
    breed: Breed | None,
    city: City,
) -> Pet:
    """Build an unsaved Pet with its images from validated input."""
    pet = Pet(
        owner_id=owner_id,
        pet_type_id=pet_type.id,
        breed_id=breed.id if breed else None,
        city_id=city.id,
        slug=f"{slugify(data['name'], fallback='pet')}-{short_token(6)}",
        images=build_pet_images(data.get("images") or []),
    )
    for field in PET_FIELDS:
        if data.get(field) is not None:
            setattr(pet, field, data[field])
    pet.pet_type = pet_type
    pet.breed = breed
    pet.city = city
    return pet
