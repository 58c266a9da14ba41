"""Ordered (column, value) pairs folded into parameterized SQL fragments.

Placeholders are positional (``%s``), so the parameter tuple must follow
the clause order exactly. Building both from the same list keeps them in
step whichever optional filters a caller supplies.
"""


class FilterBuilder:
    """Conjunctive equality predicate over a whitelist of columns.

        >>> fb = FilterBuilder(('website_id', 'slug'))
        >>> fb.add('website_id', None).add('slug', 'civic-rs').where()
        (' WHERE slug = %s', ('civic-rs',))
    """

    def __init__(self, allowed=None):
        self.allowed = tuple(allowed) if allowed is not None else None
        self._pairs = []

    def add(self, column, value):
        """Append ``column = value``. None and empty strings are skipped."""
        if self.allowed is not None and column not in self.allowed:
            raise ValueError(f'Filter on {column!r} is not allowed')
        if value is None or value == '':
            return self
        self._pairs.append((column, value))
        return self

    @classmethod
    def from_mapping(cls, mapping, allowed):
        """Build from request args, taking whitelisted keys in whitelist order."""
        builder = cls(allowed)
        for column in allowed:
            builder.add(column, mapping.get(column))
        return builder

    @property
    def columns(self):
        return tuple(column for column, _ in self._pairs)

    @property
    def params(self):
        return tuple(value for _, value in self._pairs)

    def where(self):
        """Return ``(' WHERE a = %s AND b = %s', (va, vb))`` or ``('', ())``."""
        if not self._pairs:
            return '', ()
        clause = ' AND '.join(f'{column} = %s' for column in self.columns)
        return f' WHERE {clause}', self.params

    def __len__(self):
        return len(self._pairs)


class AssignmentBuilder:
    """Ordered ``SET`` assignments for an UPDATE keyed by id.

    An assignment may carry its own SQL expression (for example
    ``COALESCE(%s, image_url)``) but still contribute exactly one parameter.
    """

    def __init__(self):
        self._parts = []

    def set(self, column, value, expression='%s'):
        self._parts.append((column, expression, value))
        return self

    def build(self, key_column, key_value):
        """Return ``('a = %s, b = %s WHERE id = %s', (va, vb, key))``."""
        if not self._parts:
            raise ValueError('Nothing to update')
        assignments = ', '.join(f'{column} = {expression}' for column, expression, _ in self._parts)
        params = tuple(value for _, _, value in self._parts) + (key_value,)
        return f'{assignments} WHERE {key_column} = %s', params
