import logging
from datetime import datetime, timezone

import i18n


class ExtractionReport:
    """Counts what happened to the keys of every table during a run"""

    def __init__(self):
        self.report = {}

    def add(self, section, measure_to_add, number=1):
        """Add to a measure in a section of the report.

        Args:
            section (str): Section name. A module/language pair, or GeneralStatistics
            measure_to_add (str): Message id of the measure in the translations file
            number (int, optional): Amount to add. Defaults to 1.
        """
        try:
            self.report[section][measure_to_add] += number
        except KeyError:
            if section not in self.report:
                self.report[section] = {}
            self.report[section][measure_to_add] = number

    def set(self, section, measure_to_add: str, number: int):
        if section not in self.report:
            self.report[section] = {}
        self.report[section][measure_to_add] = number

    def add_general_statistics(self, measure_to_add: str, number=1):
        """Shortcut for adding to the run wide section"""
        self.add("GeneralStatistics", measure_to_add, number)

    def get(self, section, measure) -> int:
        return self.report.get(section, {}).get(measure, 0)

    def write_report(self, report_title, report_file, time_started: datetime):
        """Writes the report as Markdown, one table per section.

        Args:
            report_title (str): The header of the report.
            report_file: Writable text file
            time_started (datetime): When the run started, in UTC
        """
        time_finished = datetime.now(timezone.utc)
        report_file.write(
            "\n".join(
                [
                    "# " + report_title,
                    i18n.t("blurbs.Introduction.description"),
                    "## " + i18n.t("Timings"),
                    "",
                    i18n.t("Measure") + " | " + i18n.t("Value"),
                    "--- | ---:",
                    i18n.t("Time Started:") + " | " + datetime.isoformat(time_started),
                    i18n.t("Time Finished:") + " | " + datetime.isoformat(time_finished),
                    i18n.t("Elapsed time:") + " | " + str(time_finished - time_started),
                    "",
                ]
            )
        )
        logging.info("Elapsed time: %s", time_finished - time_started)
        for section in sorted(self.report, key=section_order):
            title = (
                i18n.t("blurbs.GeneralStatistics.title")
                if section == "GeneralStatistics"
                else section
            )
            report_file.write(
                "\n".join(
                    [
                        "",
                        "## " + title,
                        "",
                        i18n.t("Measure") + " | " + i18n.t("Count"),
                        "--- | ---:",
                    ]
                    + [
                        f"{i18n.t(k)} | {self.report[section][k]:,}"
                        for k in sorted(self.report[section])
                    ]
                    + [""]
                )
            )

    def log_me(self):
        for section in sorted(self.report, key=section_order):
            logging.info("%s    ", section)
            logging.info("_______________")
            for measure in sorted(self.report[section]):
                logging.info("%s \t\t%s   ", i18n.t(measure), f"{self.report[section][measure]:,}")


def section_order(section):
    # General statistics first, then tables by name
    return section != "GeneralStatistics", section
