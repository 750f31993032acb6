from django.db import transaction


def replace_children(parent, related_name, field, values):
    """Replace a one-to-many child collection with ``values``.

    Existing rows are deleted and the new ones bulk inserted with their caller
    position, keeping order and duplicates. Must run inside the same atomic
    block as the parent write.
    """
    manager = getattr(parent, related_name)
    model = manager.model
    fk_name = manager.field.name

    with transaction.atomic():
        manager.all().delete()
        rows = [
            model(**{fk_name: parent, field: value, 'position': index})
            for index, value in enumerate(values)
        ]
        if rows:
            model.objects.bulk_create(rows)
    return len(values)
