import json
import logging

from clinvar_vcv.classifier import VcvClassifier
from clinvar_vcv.config import get_env
from clinvar_vcv.fs import BinaryOpenMode, ReadCounter, fs_open
from clinvar_vcv.reader import get_clinvar_vcv_xml_releaseinfo, read_vcv_items
from clinvar_vcv.utils import make_progress_logger

_logger = logging.getLogger("clinvar_vcv")


def parse_and_write_items(
    input_filename: str,
    output_filename: str,
    limit: None | int = None,
    classifier: VcvClassifier | None = None,
) -> dict:
    """
    Parses input file, writes one JSON line per VcvItem to output_filename.
    Output is gzipped if output_filename ends in .gz.

    Returns the release date, the number of items written and the output path.
    """
    env = get_env()
    with fs_open(input_filename) as f_in:
        releaseinfo = get_clinvar_vcv_xml_releaseinfo(f_in)
    release_date = releaseinfo["release_date"]
    _logger.info(f"Parsing release date: {release_date}")

    item_count = 0
    byte_log_progress = make_progress_logger(
        logger=_logger,
        fmt="Read {elapsed_value} bytes in {elapsed:.2f}s. Total bytes read: {current_value}.",
        interval=env.progress_interval,
    )
    item_log_progress = make_progress_logger(
        logger=_logger,
        fmt="Read {elapsed_value} variation_archive in {elapsed:.2f}s. Total: {current_value}.",
        interval=env.progress_interval,
    )

    _logger.info("Opening file for writing: %s", output_filename)
    f_out = fs_open(
        output_filename,
        make_parents=True,
        mode=BinaryOpenMode.WRITE,
        compresslevel=env.gzip_compresslevel,
    )
    try:
        with fs_open(input_filename) as raw_in:
            f_in = ReadCounter(raw_in)
            byte_log_progress(0)  # initialize
            item_log_progress(0)  # initialize

            for item in read_vcv_items(f_in, classifier=classifier):
                obj_dict = item.to_dict()
                obj_dict["release_date"] = release_date
                f_out.write(json.dumps(obj_dict).encode("utf-8"))
                f_out.write("\n".encode("utf-8"))

                item_count += 1
                byte_log_progress(f_in.tell())
                item_log_progress(item_count)

                if limit and item_count >= limit:
                    _logger.info("Hard limit reached: %d", limit)
                    break

            # Log final status
            byte_log_progress(f_in.tell(), force=True)
            item_log_progress(item_count, force=True)

    except Exception as e:
        _logger.critical("Exception caught in parse_and_write_items")
        raise e
    finally:
        _logger.debug("Closing output file")
        f_out.close()

    return {
        "release_date": release_date,
        "items": item_count,
        "output": output_filename,
    }
