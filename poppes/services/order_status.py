"""Display projection of an order's lifecycle status."""

from collections import namedtuple

ORDER_STATUSES = ('pending', 'packed', 'shipped', 'delivered')

StatusView = namedtuple('StatusView', ['status', 'label', 'percent', 'icon', 'color'])
TimelineStep = namedtuple('TimelineStep', ['status', 'label', 'icon', 'reached'])

STATUS_VIEWS = {
    'pending': StatusView('pending', 'Pending', 25, 'clock', 'yellow'),
    'packed': StatusView('packed', 'Packed', 50, 'package', 'blue'),
    'shipped': StatusView('shipped', 'Shipped', 75, 'truck', 'purple'),
    'delivered': StatusView('delivered', 'Delivered', 100, 'check', 'green'),
}


def status_view(status):
    """Label, completion percentage, icon and colour hints for ``status``."""
    view = STATUS_VIEWS.get(status)
    if view is not None:
        return view
    label = str(status).replace('_', ' ').title() if status else 'Unknown'
    return StatusView(status, label, 0, 'clock', 'gray')


def ordinal(status):
    """Position in the lifecycle, or -1 for an unrecognised status."""
    try:
        return ORDER_STATUSES.index(status)
    except ValueError:
        return -1


def timeline(status):
    position = ordinal(status)
    return [
        TimelineStep(step, STATUS_VIEWS[step].label, STATUS_VIEWS[step].icon,
                     position >= index)
        for index, step in enumerate(ORDER_STATUSES)
    ]


def can_transition(current, new):
    """Statuses only move forward (or stay put)."""
    if new not in STATUS_VIEWS:
        return False
    return ordinal(new) >= ordinal(current)
