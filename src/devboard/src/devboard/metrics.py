from prometheus_client import Counter, REGISTRY

# Keep global references so repeated imports/instantiations don't register the
# same metric name multiple times (pytest builds many dispatchers in one process).
_counter_cache: dict[str, Counter] = {}

label_names = ["provider", "kind"]


def CounterWithParams(metric_name: str, description: str) -> Counter:
    if metric_name not in _counter_cache:
        _counter_cache[metric_name] = Counter(
            metric_name,
            description,
            labelnames=label_names,
            registry=REGISTRY,
        )
    return _counter_cache[metric_name]


WIDGETS_DISPATCHED = CounterWithParams(
    "devboard_widgets_dispatched", "Widgets whose data was fetched and shaped successfully"
)
WIDGET_FAILURES = CounterWithParams("devboard_widget_failures", "Widgets that failed while being dispatched")


def provider_of(kind: str) -> str:
    """``"ga"`` for ``"ga.bar"``; kinds without a prefix count as ``"unknown"``."""
    prefix, _, rest = kind.partition(".")
    return prefix if rest else "unknown"
