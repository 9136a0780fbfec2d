"""Photo manifest loader - reads a YAML export of the photos collection."""

from pathlib import Path

import yaml

from folio.utils.flow_log import log_flow
from folio.utils.media import Photo, read_dimensions


def load_photo_manifest(manifest_path: Path) -> list[Photo]:
    """Load photos from a manifest file.

    Accepts either `{photos: [...]}` or a bare list of photo documents.
    Entries that cannot be parsed are skipped.

    Args:
        manifest_path: Path to YAML manifest

    Returns:
        Photos in manifest order, or [] if the file is unusable
    """
    manifest_path = Path(manifest_path)
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log_flow('MANIFEST', f'YAML parse error in {manifest_path.name}: {e}', level='ERROR')
        return []
    except FileNotFoundError:
        log_flow('MANIFEST', f'Manifest not found: {manifest_path}', level='ERROR')
        return []

    if isinstance(data, dict):
        data = data.get('photos')
    if not isinstance(data, list):
        log_flow('MANIFEST', f'No photo list in {manifest_path.name}', level='WARNING')
        return []

    photos = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            log_flow('MANIFEST', f'Skipping entry {position}: not a mapping', level='WARNING')
            continue
        try:
            photo = Photo.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            log_flow('MANIFEST', f'Skipping entry {position}: {e!r}', level='WARNING')
            continue
        _fill_missing_dimensions(photo, entry['image'].get('path'), manifest_path.parent)
        photos.append(photo)
    return photos


def _fill_missing_dimensions(photo: Photo, image_path, base_dir: Path):
    """Read width/height from a local copy of the image when the export lacks them."""
    media = photo.image
    if (media.width > 0 and media.height > 0) or not image_path:
        return
    image_path = Path(image_path)
    if not image_path.is_absolute():
        image_path = base_dir / image_path
    dimensions = read_dimensions(image_path)
    if dimensions is None:
        log_flow('MANIFEST', f'No dimensions for photo {photo.id!r} ({image_path.name})',
                 level='WARNING')
        return
    media.width, media.height = dimensions


def featured_first(photos: list[Photo]) -> list[Photo]:
    # sorted() is stable, so manifest order survives inside each group
    return sorted(photos, key=lambda photo: not photo.featured)
