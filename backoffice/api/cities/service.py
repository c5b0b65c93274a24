"""
City controller logic: validation, image handling and response shaping.
"""

from __future__ import annotations

from typing import Any

from backoffice.api.dependencies import ListParams
from backoffice.api.payloads import RequestPayload, parse_payload
from backoffice.api.responses import envelope, page_envelope, raise_for_result, require_found
from backoffice.entities import Record
from backoffice.errors import ValidationError
from backoffice.resources import CityRepository
from backoffice.utils.slugs import slugify
from backoffice.utils.uploads import UploadStore
from backoffice.utils.urls import build_asset_url, clean_asset_path

from .schemas import CityDataPayload, CityPayload

IMAGE_FOLDER = "cities"


def shape_city(city: Record, base_url: str) -> Record:
    shaped = {**city, "img": build_asset_url(base_url, IMAGE_FOLDER, city.get("img"))}
    if "communities" in city:
        shaped["communities"] = [
            {**c, "img": build_asset_url(base_url, "communities", c.get("img"))}
            for c in city["communities"]
        ]
    return shaped


async def list_cities(repo: CityRepository, params: ListParams, base_url: str) -> dict:
    page = await repo.list(params.filters, **params.query_kwargs())
    return page_envelope(page, lambda row: shape_city(row, base_url))


async def list_admin(repo: CityRepository, params: ListParams, base_url: str) -> dict:
    page = await repo.list_admin(params.filters, **params.query_kwargs())
    return page_envelope(page, lambda row: shape_city(row, base_url))


async def get_city(repo: CityRepository, city_id: int, base_url: str) -> dict:
    city = require_found(await repo.find_by_id(city_id), repo.config.not_found_message)
    return envelope(shape_city(city, base_url))


async def get_city_by_slug(repo: CityRepository, slug: str, base_url: str) -> dict:
    city = require_found(await repo.find_by_slug(slug), repo.config.not_found_message)
    return envelope(shape_city(city, base_url))


async def check_slug(repo: CityRepository, slug: str | None, exclude_id: int | None) -> dict:
    if not slug or not slugify(slug):
        raise ValidationError("Slug is required")
    available = await repo.slug_available(slug, exclude_id)
    return envelope({"slug": slugify(slug), "available": available})


async def create_city(
    repo: CityRepository, uploads: UploadStore, payload: RequestPayload
) -> dict:
    fields = parse_payload(CityPayload, payload.fields, drop_none=True)
    if not fields.get("name"):
        raise ValidationError("City name is required")
    if "img" in fields:
        fields["img"] = clean_asset_path(fields["img"], IMAGE_FOLDER)

    saved = await uploads.save_fields(payload.files, ["img"], IMAGE_FOLDER)
    fields.update(saved)
    async with uploads.discard_on_error(saved, IMAGE_FOLDER):
        result = raise_for_result(await repo.create(fields))

    return envelope(
        message="City created successfully",
        cityId=result.data["id"],
        slug=result.data.get("slug"),
    )


async def update_city(
    repo: CityRepository, uploads: UploadStore, city_id: int, payload: RequestPayload
) -> dict:
    fields = parse_payload(CityPayload, payload.fields)
    if "img" in fields:
        fields["img"] = clean_asset_path(fields["img"], IMAGE_FOLDER)

    existing = require_found(await repo.find_by_id(city_id), repo.config.not_found_message)
    new_files = await uploads.save_fields(payload.files, ["img"], IMAGE_FOLDER)
    fields.update(new_files)
    if not fields:
        raise ValidationError("No fields to update")

    async with uploads.discard_on_error(new_files, IMAGE_FOLDER):
        result = raise_for_result(await repo.update(city_id, fields))

    # Old image goes only once the replacement is stored.
    await uploads.delete_fields(existing, IMAGE_FOLDER, new_files)
    return envelope(message="City updated successfully", slug=result.data.get("slug"))


async def update_status(repo: CityRepository, city_id: int, status: int) -> dict:
    raise_for_result(await repo.update_status(city_id, status))
    return envelope(message="City status updated successfully")


async def soft_delete(repo: CityRepository, city_id: int) -> dict:
    raise_for_result(await repo.soft_delete(city_id))
    return envelope(message="City deleted successfully")


async def restore(repo: CityRepository, city_id: int) -> dict:
    raise_for_result(await repo.restore(city_id))
    return envelope(message="City restored successfully")


async def hard_delete(repo: CityRepository, uploads: UploadStore, city_id: int) -> dict:
    result = raise_for_result(await repo.hard_delete(city_id))
    await uploads.delete_fields(result.data, IMAGE_FOLDER, ["img"])
    return envelope(message="City permanently deleted")


async def stats(repo: CityRepository) -> dict:
    return envelope(await repo.stats())


async def countries(repo: CityRepository) -> dict:
    return envelope(await repo.countries())


async def states(repo: CityRepository, country_id: int | None) -> dict:
    return envelope(await repo.states(country_id))


async def city_data(repo: CityRepository, country_id: int) -> dict:
    return envelope(await repo.city_data_for_country(country_id))


async def create_city_data(repo: CityRepository, fields: dict[str, Any]) -> dict:
    data = parse_payload(CityDataPayload, fields, drop_none=True)
    if not data.get("country_id") or not data.get("name"):
        raise ValidationError("Country ID and name are required")
    result = raise_for_result(await repo.city_data.create(data))
    return envelope(message="City data created successfully", id=result.data["id"])


async def update_city_data(repo: CityRepository, data_id: int, fields: dict[str, Any]) -> dict:
    data = parse_payload(CityDataPayload, fields)
    if not data:
        raise ValidationError("No fields to update")
    raise_for_result(await repo.city_data.update(data_id, data))
    return envelope(message="City data updated successfully")


async def delete_city_data(repo: CityRepository, data_id: int) -> dict:
    raise_for_result(await repo.city_data.soft_delete(data_id))
    return envelope(message="City data deleted successfully")
