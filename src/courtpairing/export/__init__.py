"""CSV and JSON export of schedules, results and standings."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from courtpairing.export.csv_export import (
    club_csv_rows,
    match_date,
    session_csv_filename,
    session_csv_rows,
    write_club_csv,
    write_session_csv,
)
from courtpairing.export.report import save_report, standings_report

__all__ = [
    "club_csv_rows",
    "match_date",
    "save_report",
    "session_csv_filename",
    "session_csv_rows",
    "standings_report",
    "write_club_csv",
    "write_session_csv",
]
