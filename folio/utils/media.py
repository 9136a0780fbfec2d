"""Media URL handling, responsive sizes and date formatting for gallery photos.

All media URLs are turned into relative paths so they can be proxied to the
CMS in both development and production.
"""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from pathlib import Path
from urllib.parse import urlsplit

import imagesize
from PIL import Image as pilimage

from folio.utils.flow_log import log_flow
from folio.widgets.masonry_layout import MasonryItem

WEBP_SIZE_NAMES = ('xs', 'sm', 'md', 'lg', 'xl', 'xxl')
AVIF_SIZE_NAMES = tuple(f'{name}-avif' for name in WEBP_SIZE_NAMES)
LEGACY_SIZE_NAMES = ('thumbnail', 'medium', 'large')

MONTH_ABBREVIATIONS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                       'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

# Header reads beyond these limits are double checked with Pillow.
SUSPICIOUS_MIN_RATIO = 0.2
SUSPICIOUS_MAX_RATIO = 5.0
SUSPICIOUS_MAX_DIMENSION = 12000


@dataclass
class MediaSize:
    url: str
    width: int
    height: int

    @classmethod
    def from_dict(cls, data: dict) -> 'MediaSize':
        return cls(url=data.get('url') or '',
                   width=int(data.get('width') or 0),
                   height=int(data.get('height') or 0))


@dataclass
class Media:
    id: str
    url: str
    width: int
    height: int
    alt: str = ''
    filename: str = ''
    mime_type: str = ''
    sizes: dict[str, MediaSize] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> 'Media':
        """Build from a CMS media document (camelCase keys)."""
        sizes = {
            name: MediaSize.from_dict(size)
            for name, size in (data.get('sizes') or {}).items()
            if size
        }
        return cls(
            id=str(data['id']),
            url=data.get('url') or '',
            width=int(data.get('width') or 0),
            height=int(data.get('height') or 0),
            alt=data.get('alt') or '',
            filename=data.get('filename') or '',
            mime_type=data.get('mimeType') or '',
            sizes=sizes,
        )

    @property
    def aspect_height(self) -> float:
        return aspect_height(self.width, self.height)


@dataclass
class Photo:
    id: str
    title: str
    image: Media
    date: str
    description: str | None = None
    featured: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> 'Photo':
        image = data['image']
        if not isinstance(image, dict):
            raise TypeError(f'Photo {data.get("id")!r} has no populated image')
        return cls(
            id=str(data['id']),
            title=data.get('title') or '',
            image=Media.from_dict(image),
            date=str(data.get('date') or ''),
            description=data.get('description'),
            featured=bool(data.get('featured', False)),
        )


def to_relative_url(url: str) -> str:
    """Strip any scheme and host, e.g. https://host/api/media/x.webp -> /api/media/x.webp."""
    if not url:
        return ''
    path = urlsplit(url).path
    if not path.startswith('/'):
        path = '/' + path
    return path


def get_image_url(media: Media | None, size: str | None = None) -> str:
    """
    Get the URL for a media item, optionally at a specific size.

    Falls back to the original upload when the size is missing. Always
    returns a relative URL.
    """
    if media is None:
        return ''
    if size:
        media_size = media.sizes.get(size)
        if media_size and media_size.url:
            return to_relative_url(media_size.url)
    return to_relative_url(media.url)


def get_srcset(media: Media | None, avif: bool = False) -> str:
    """Build an `srcset` attribute value from the responsive sizes, narrowest first."""
    if media is None:
        return ''
    names = AVIF_SIZE_NAMES if avif else WEBP_SIZE_NAMES
    candidates = [
        media.sizes[name] for name in names
        if name in media.sizes and media.sizes[name].url and media.sizes[name].width > 0
    ]
    candidates.sort(key=lambda size: size.width)
    return ', '.join(f'{to_relative_url(size.url)} {size.width}w' for size in candidates)


def format_date(date_string: str, tz: tzinfo | None = None) -> str:
    """Format an ISO date for display, e.g. '2024-03-05' -> '5 Mar 2024'.

    Timestamps with an offset are shown in `tz` (local time when omitted).
    Plain dates are shown as written. Unparseable input gives ''.
    """
    try:
        parsed = datetime.fromisoformat(date_string.replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        log_flow('MEDIA', f'Invalid date: {date_string!r}', level='WARNING')
        return ''
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return f'{parsed.day} {MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}'


def aspect_height(width: int | None, height: int | None) -> float:
    """Height as a percentage of width; square when dimensions are unknown."""
    if not width or not height or width <= 0 or height <= 0:
        return 100.0
    return height / width * 100


def masonry_items_from_photos(photos: list[Photo]) -> list[MasonryItem]:
    return [MasonryItem(id=photo.id, height=photo.image.aspect_height) for photo in photos]


def read_dimensions(path: Path) -> tuple[int, int] | None:
    """
    Read `(width, height)` of an image file.

    The header is read with imagesize first; unreadable or implausible
    results are verified with Pillow, which also applies EXIF rotation.
    """
    path = Path(path)
    try:
        dimensions = imagesize.get(str(path))
    except (OSError, ValueError) as e:
        log_flow('MEDIA', f'Header read failed for {path.name}: {e}', level='WARNING')
        dimensions = (-1, -1)

    is_suspicious = False
    if dimensions == (-1, -1):
        is_suspicious = True
    elif dimensions[0] > 0 and dimensions[1] > 0:
        aspect_ratio = dimensions[0] / dimensions[1]
        if aspect_ratio < SUSPICIOUS_MIN_RATIO or aspect_ratio > SUSPICIOUS_MAX_RATIO:
            is_suspicious = True
        elif max(dimensions) > SUSPICIOUS_MAX_DIMENSION:
            is_suspicious = True

    # JPEG/TIFF can carry an EXIF rotation that the header read ignores
    needs_exif = path.suffix.lower() in ('.jpg', '.jpeg', '.tif', '.tiff')
    if is_suspicious or needs_exif:
        try:
            with pilimage.open(path) as img:
                dimensions = img.size
                if needs_exif:
                    exif = img.getexif()
                    if exif:
                        orientation = exif.get(274)
                        if orientation in (5, 6, 7, 8):
                            dimensions = (dimensions[1], dimensions[0])
        except (OSError, ValueError) as e:
            log_flow('MEDIA', f'Pillow could not read {path.name}: {e}', level='WARNING')

    if not dimensions or dimensions[0] <= 0 or dimensions[1] <= 0:
        return None
    return int(dimensions[0]), int(dimensions[1])
