"""Resource kinds served by the content API.

Each kind names its table, the fields a create/update must carry, the
optional fields (stored as NULL when absent), the public list filters and
the Indonesian messages the microsite admin panel expects.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class ResourceKind:
    name: str
    table: str
    required: Tuple[str, ...]
    optional: Tuple[str, ...] = ()
    filters: Tuple[str, ...] = ('website_id',)
    has_image: bool = False
    list_fields: Tuple[str, ...] = ()
    json_fields: Tuple[str, ...] = ()
    required_message: str = ''
    not_found_message: str = ''
    deleted_message: str = ''
    defaults: Dict[str, object] = field(default_factory=dict)

    @property
    def columns(self):
        """Writable columns in insert order (image last when supported)."""
        cols = self.required + self.optional
        return cols + ('image_url',) if self.has_image else cols

    def default_for(self, column):
        value = self.defaults.get(column)
        # fresh containers per call; the defaults dict is shared
        if isinstance(value, list):
            return list(value)
        if isinstance(value, dict):
            return dict(value)
        return value


WEBSITES = ResourceKind(
    name='websites',
    table='websites',
    required=('domain', 'name'),
    filters=('domain',),
    required_message='Domain dan nama diperlukan',
    not_found_message='Website tidak ditemukan',
    deleted_message='Website berhasil dihapus',
)

SALES_INFO = ResourceKind(
    name='sales_info',
    table='sales_info',
    required=('website_id', 'name', 'phone'),
    optional=('location', 'instagram_url', 'tiktok_url'),
    has_image=True,
    required_message='Website ID, nama, dan telepon diperlukan',
    not_found_message='Sales Info tidak ditemukan',
    deleted_message='Sales Info berhasil dihapus',
)

CARS = ResourceKind(
    name='cars',
    table='cars',
    required=('website_id', 'slug', 'name', 'variant', 'price', 'type'),
    optional=('promo', 'description', 'features', 'specs'),
    filters=('website_id', 'slug'),
    has_image=True,
    list_fields=('features',),
    json_fields=('specs',),
    required_message='Website ID, slug, nama, varian, harga, dan tipe diperlukan',
    not_found_message='Mobil tidak ditemukan',
    deleted_message='Mobil berhasil dihapus',
    defaults={'features': [], 'specs': {}},
)

TESTIMONIALS = ResourceKind(
    name='testimonials',
    table='testimonials',
    required=('website_id', 'name', 'car', 'stars', 'text'),
    has_image=True,
    required_message='Website ID, nama, mobil, bintang, dan teks diperlukan',
    not_found_message='Testimoni tidak ditemukan',
    deleted_message='Testimoni berhasil dihapus',
)

FAQS = ResourceKind(
    name='faqs',
    table='faqs',
    required=('website_id', 'question', 'answer'),
    required_message='Website ID, pertanyaan, dan jawaban diperlukan',
    not_found_message='FAQ tidak ditemukan',
    deleted_message='FAQ berhasil dihapus',
)

RESOURCE_KINDS = (WEBSITES, SALES_INFO, CARS, TESTIMONIALS, FAQS)
