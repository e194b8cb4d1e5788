import dataclasses
import datetime
import json
import logging
import os


def json_serial(obj):
    """JSON serializer for the check's records and for datetimes."""
    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Type {type(obj)} not serializable")


def to_json(data):
    return json.dumps(data, indent=4, default=json_serial)


def save_to_json(data, output_file):
    """Saves a tally, a record list or plain data to a JSON file."""
    if data is None:
        logging.info("No data to save for %s.", output_file)
        return

    output_dir = os.path.dirname(output_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4, default=json_serial)
    logging.info("Successfully wrote data to %s", output_file)
