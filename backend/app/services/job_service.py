import re
from datetime import datetime, timezone
from typing import Any, Iterable

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import TypeAdapter, ValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from app.schemas.job import JobCreate

RESERVED_QUERY_PARAMS = ("page", "sort", "limit", "fields", "search")
# The list view is a summary; these fields only come back from GET /job/{id}.
SUMMARY_HIDDEN_FIELDS = ("banner", "description", "company")

_datetime_adapter = TypeAdapter(datetime)
_number_re = re.compile(r"^-?\d+(\.\d+)?$")


class InvalidJobId(ValueError):
    pass


class InvalidJobData(ValueError):
    pass


class InvalidQuery(ValueError):
    pass


def to_timestamp(value: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def now_timestamp() -> str:
    return to_timestamp(datetime.now(timezone.utc))


def normalize_deadline(value: Any) -> str:
    if isinstance(value, datetime):
        return to_timestamp(value)
    try:
        return to_timestamp(_datetime_adapter.validate_python(value))
    except ValidationError as exc:
        raise InvalidJobData("Invalid deadline") from exc


def parse_job_id(job_id: str) -> ObjectId:
    try:
        return ObjectId(job_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidJobId(f"Invalid job id: {job_id}") from exc


def serialize(document: dict[str, Any] | None) -> dict[str, Any] | None:
    if document is None:
        return None
    if "_id" in document:
        document["_id"] = str(document["_id"])
    return document


# ------------------------------------------------------------------
# Query building
# ------------------------------------------------------------------


def _candidates(value: str) -> list[Any]:
    # Query strings never carry types; let "5000" also match a stored 5000.
    if _number_re.match(value):
        return [value, float(value) if "." in value else int(value)]
    return [value]


def build_list_filter(params: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Turn query-string pairs into a Mongo filter.

    Reserved names are skipped, ``search`` becomes a case-insensitive title
    match, a key given more than once matches any of its values.
    """
    grouped: dict[str, list[str]] = {}
    search = None
    for key, value in params:
        if key == "search":
            search = value
            continue
        if key in RESERVED_QUERY_PARAMS:
            continue
        if not key or key.startswith("$"):
            raise InvalidQuery(f"Invalid filter field: {key!r}")
        grouped.setdefault(key, []).append(value)

    query: dict[str, Any] = {}
    for key, values in grouped.items():
        matches = [c for value in values for c in _candidates(value)]
        query[key] = matches[0] if len(matches) == 1 else {"$in": matches}

    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}
    return query


def _split_fields(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [f.strip() for f in raw.split(",") if f.strip()]


def build_sort(sort: str | None) -> list[tuple[str, int]]:
    keys = []
    for field in _split_fields(sort):
        direction = ASCENDING
        if field.startswith("-"):
            direction, field = DESCENDING, field[1:]
        if not field or field.startswith("$"):
            raise InvalidQuery(f"Invalid sort field: {field!r}")
        keys.append((field, direction))
    return keys


def _is_hidden(field: str) -> bool:
    # Covers dotted paths into a hidden field, e.g. "company.name".
    return field.split(".", 1)[0] in SUMMARY_HIDDEN_FIELDS


def build_projection(fields: str | None) -> dict[str, int]:
    requested = [
        f for f in _split_fields(fields)
        if not _is_hidden(f) and not f.startswith("$")
    ]
    if requested:
        return {f: 1 for f in requested}
    return {f: 0 for f in SUMMARY_HIDDEN_FIELDS}


# ------------------------------------------------------------------
# Store operations
# ------------------------------------------------------------------


def create_job(collection: Collection, job: JobCreate) -> InsertOneResult:
    document = job.model_dump()
    # The store assigns ids; a client-sent one would not be an ObjectId.
    document.pop("_id", None)
    document["deadline"] = to_timestamp(job.deadline)
    document["candidates"] = []
    document["applicants"] = 0
    document["createdAt"] = now_timestamp()
    return collection.insert_one(document)


def list_jobs(
    collection: Collection,
    query: dict[str, Any],
    projection: dict[str, int],
    sort: list[tuple[str, int]] | None = None,
    page: int = 1,
    limit: int | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """Return one page of matching jobs and the total number of matches.

    Without a ``limit`` every match is returned.
    """
    cursor = collection.find(query, projection)
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.skip((page - 1) * limit).limit(limit)
    jobs = [serialize(doc) for doc in cursor]
    total = collection.count_documents(query) if limit else len(jobs)
    return jobs, total


def list_owned_jobs(collection: Collection, email: str) -> list[dict[str, Any]]:
    return [serialize(doc) for doc in collection.find({"created_by.email": email})]


def list_applied_jobs(collection: Collection, email: str) -> list[dict[str, Any]]:
    cursor = collection.find({"candidates.email": email}, {"candidates": 0})
    return [serialize(doc) for doc in cursor]


def get_job(collection: Collection, job_id: str) -> dict[str, Any] | None:
    return serialize(collection.find_one({"_id": parse_job_id(job_id)}))


def job_exists(collection: Collection, job_id: str) -> bool:
    return collection.count_documents({"_id": parse_job_id(job_id)}, limit=1) > 0


def has_applied(collection: Collection, job_id: str, email: str) -> bool:
    query = {"_id": parse_job_id(job_id), "candidates.email": email}
    return collection.count_documents(query, limit=1) > 0


def prepare_update(data: dict[str, Any]) -> dict[str, Any]:
    update = {k: v for k, v in data.items() if k != "_id"}
    for key in update:
        if not key or key.startswith("$"):
            raise InvalidJobData(f"Invalid field: {key!r}")
    if not update:
        raise InvalidJobData("No fields to update")
    if "deadline" in update:
        update["deadline"] = normalize_deadline(update["deadline"])
    return update


def _id_filter(job_id: str, owner: str | None) -> dict[str, Any]:
    query: dict[str, Any] = {"_id": parse_job_id(job_id)}
    if owner is not None:
        query["created_by.email"] = owner
    return query


def update_job(
    collection: Collection, job_id: str, data: dict[str, Any], owner: str | None = None
) -> UpdateResult:
    query = _id_filter(job_id, owner)
    return collection.update_one(query, {"$set": prepare_update(data)})


def delete_job(collection: Collection, job_id: str, owner: str | None = None) -> DeleteResult:
    return collection.delete_one(_id_filter(job_id, owner))


def apply_to_job(collection: Collection, job_id: str, name: str, email: str) -> UpdateResult:
    """Append ``{name, email}`` to the job's candidates unless already present.

    The duplicate check lives in the update predicate, so two concurrent
    applications from one email can append at most once. A zero
    ``matched_count`` means the job is missing or the email already applied.
    """
    return collection.update_one(
        {"_id": parse_job_id(job_id), "candidates.email": {"$ne": email}},
        {
            "$inc": {"applicants": 1},
            "$push": {"candidates": {"name": name, "email": email}},
        },
    )
