from datetime import datetime


def format_file_size(size):
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            return f"{round(value, 2):g} {unit}"
        value /= 1024


def format_timestamp(timestamp: datetime) -> str:
    # Entries are stored in UTC, shown the same way
    return timestamp.strftime('%Y-%m-%d %H:%M:%S')
