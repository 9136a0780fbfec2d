"""Print the masonry layout of a photo manifest as JSON."""

import argparse
import json
import sys
from dataclasses import asdict

from folio.models.photo_manifest import featured_first, load_photo_manifest
from folio.utils.media import (format_date, get_image_url, get_srcset,
                              masonry_items_from_photos)
from folio.utils.settings import DEFAULT_SETTINGS, get_layout_mode, settings
from folio.widgets.masonry_layout import (calculate_positions,
                                          calculate_row_positions,
                                          column_count_for_width,
                                          get_column_width, get_total_height)


def build_layout(photos, viewport_width: int, container_width: int | None = None,
                 default_columns: int = 3, gap: int = 16,
                 layout_mode: str = 'balanced') -> dict:
    """Lay out `photos` for a viewport and return a JSON-ready dict."""
    if container_width is None:
        container_width = viewport_width
    columns = column_count_for_width(viewport_width, default_columns)
    column_width = get_column_width(container_width, columns, gap)
    layout = calculate_row_positions if layout_mode == 'rows' else calculate_positions
    positions = layout(masonry_items_from_photos(photos), columns, gap, column_width)
    photos_by_id = {photo.id: photo for photo in photos}

    items = []
    for position in positions:
        photo = photos_by_id[position.id]
        item = asdict(position)
        item['title'] = photo.title
        item['date'] = format_date(photo.date) if photo.date else ''
        item['src'] = get_image_url(photo.image, 'md')
        item['srcset'] = get_srcset(photo.image)
        items.append(item)

    return {
        'columns': columns,
        'column_width': column_width,
        'gap': gap,
        'total_height': get_total_height(positions),
        'items': items,
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('manifest', help='YAML photo manifest')
    parser.add_argument('--viewport-width', type=int, default=1280)
    parser.add_argument('--container-width', type=int, default=None)
    parser.add_argument('--columns', type=int, default=settings.value(
        'masonry_column_count', defaultValue=DEFAULT_SETTINGS['masonry_column_count'], type=int))
    parser.add_argument('--gap', type=int, default=settings.value(
        'masonry_gap', defaultValue=DEFAULT_SETTINGS['masonry_gap'], type=int))
    parser.add_argument('--mode', choices=('balanced', 'rows'), default=get_layout_mode())
    parser.add_argument('--featured-first', action='store_true')
    args = parser.parse_args(argv)

    photos = load_photo_manifest(args.manifest)
    if not photos:
        print(f'No photos loaded from {args.manifest}', file=sys.stderr)
        return 1
    if args.featured_first:
        photos = featured_first(photos)

    result = build_layout(photos, args.viewport_width, args.container_width,
                          default_columns=args.columns, gap=args.gap,
                          layout_mode=args.mode)
    json.dump(result, sys.stdout, indent=2)
    print()
    return 0


if __name__ == '__main__':
    sys.exit(main())
