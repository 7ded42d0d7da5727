from git_wrapped.models import WrappedStats


def format_json(stats: WrappedStats) -> str:
    return stats.model_dump_json(indent=2)
