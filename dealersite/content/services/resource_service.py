"""Business logic shared by every content resource kind."""
import json
import logging

from core.errors import ValidationError, NotFound
from core.query_builder import FilterBuilder

logger = logging.getLogger('dealersite.content.service')


class ResourceService:
    """List/get/create/update/delete for one ``ResourceKind``.

    Field validation and image validation both finish before the store is
    touched. Image-bearing kinds keep their stored path when an update
    carries no new file.
    """

    def __init__(self, repo, uploads=None):
        self.repo = repo
        self.kind = repo.kind
        self.uploads = uploads

    def list(self, args=None):
        filters = FilterBuilder.from_mapping(args or {}, self.kind.filters)
        return self.repo.list(filters)

    def get(self, record_id):
        row = self.repo.get_by_id(record_id)
        if not row:
            raise NotFound(self.kind.not_found_message)
        return row

    def create(self, data, image=None):
        values = self.validate(data)
        values['image_url'] = self._store_image(image)
        row = self.repo.create(values)
        logger.info(f'{self.kind.name} {row["id"]} created')
        return row

    def update(self, record_id, data, image=None):
        values = self.validate(data)
        # no file is written for an id that does not exist
        if image is not None and self.kind.has_image and not self.repo.get_by_id(record_id):
            raise NotFound(self.kind.not_found_message)
        row = self.repo.update(record_id, values, image_url=self._store_image(image))
        if not row:
            raise NotFound(self.kind.not_found_message)
        logger.info(f'{self.kind.name} {record_id} updated')
        return row

    def delete(self, record_id):
        if not self.repo.delete(record_id):
            raise NotFound(self.kind.not_found_message)
        logger.info(f'{self.kind.name} {record_id} deleted')
        return {'message': self.kind.deleted_message}

    # ============== Helpers ==============

    def validate(self, data):
        """Return the writable values or raise ValidationError.

        A required field counts as missing when it is falsy, matching what
        the admin panel has always been told.
        """
        data = data or {}
        if any(not data.get(column) for column in self.kind.required):
            raise ValidationError(self.kind.required_message)

        values = {column: data[column] for column in self.kind.required}
        for column in self.kind.optional:
            value = data.get(column)
            if column in self.kind.list_fields:
                value = _parse_list(column, value)
            elif column in self.kind.json_fields:
                value = _parse_mapping(column, value)
            values[column] = value if value not in (None, '') else self.kind.default_for(column)
        return values

    def _store_image(self, image):
        """Persist ``image`` and return its path; None when there is nothing to store.

        Kinds without image support ignore stray files.
        """
        if image is None or not self.kind.has_image:
            return None
        return self.uploads.save(image)


def _parse_list(column, value):
    """Accept a list or a JSON-encoded list (multipart forms send strings)."""
    if value in (None, ''):
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValidationError(f'Format {column} tidak valid')
    if not isinstance(value, list):
        raise ValidationError(f'Format {column} tidak valid')
    return [str(item) for item in value]


def _parse_mapping(column, value):
    """Accept a dict or a JSON-encoded object."""
    if value in (None, ''):
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValidationError(f'Format {column} tidak valid')
    if not isinstance(value, dict):
        raise ValidationError(f'Format {column} tidak valid')
    return value
