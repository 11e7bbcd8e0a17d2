from datetime import date
from pathlib import Path
from typing import List

import pytest

from bordercross.analysis.records import MonthlyPoint, Observation

CSV_HEADER = "Port Name,State,Port Code,Border,Date,Measure,Value,Latitude,Longitude,Point\n"


def obs(border: str, date_str: str, measure: str, value: int) -> Observation:
    return Observation(border=border, date=date_str, measure=measure, value=value)


def point(year: int, month: int, total: float) -> MonthlyPoint:
    return MonthlyPoint(
        month=date(year, month, 1),
        total=total,
        crossings=int(round(total * 1_000_000)),
    )


@pytest.fixture
def sample_rows() -> List[Observation]:
    """Two borders, mixed measures, one foreign border and one bad date."""
    return [
        obs("US-Mexico Border", "Jan 1996", "Pedestrians", 1_000_000),
        obs("US-Mexico Border", "Jan 1996", "Bus Passengers", 500_000),
        obs("US-Mexico Border", "Jan 1996", "Trucks", 9_000_000),
        obs("US-Mexico Border", "Feb 1996", "Personal Vehicle Passengers", 2_000_000),
        obs("US-Mexico Border", "Mar 1997", "Train Passengers", 250_000),
        obs("US-Canada Border", "Jan 1996", "Pedestrians", 40_000),
        obs("US-Canada Border", "Jan 1996", "Personal Vehicles", 7_000_000),
        obs("US-Canada Border", "Jul 1998", "Personal Vehicle Passengers", 3_000_000),
        obs("US-Atlantis Border", "Jan 1996", "Pedestrians", 123_456_789),
        obs("US-Mexico Border", "13 Foo 2020", "Pedestrians", 777_777),
    ]


@pytest.fixture
def four_year_rows() -> List[Observation]:
    """US-Mexico: 1996-1999 complete (one month per year) plus a lone 2000."""
    values = {1996: 10_000_000, 1997: 20_000_000, 1998: 30_000_000, 1999: 40_000_000}
    rows = [
        obs("US-Mexico Border", f"Jun {year}", "Pedestrians", value)
        for year, value in values.items()
    ]
    rows.append(obs("US-Mexico Border", "Jan 2000", "Pedestrians", 5_000_000))
    return rows


@pytest.fixture
def dataset_csv(tmp_path: Path) -> Path:
    path = tmp_path / "Border_Crossing_Entry_Data.csv"
    path.write_text(
        CSV_HEADER
        + 'Calexico,California,2503,US-Mexico Border,Jan 1996,Pedestrians,"1,000,000",32.67,-115.49,POINT (-115.49 32.67)\n'
        + "Calexico,California,2503,US-Mexico Border,Jan 1996,Bus Passengers,500000,32.67,-115.49,POINT (-115.49 32.67)\n"
        + "Calexico,California,2503,US-Mexico Border,Jan 1996,Trucks,9000000,32.67,-115.49,POINT (-115.49 32.67)\n"
        + "Blaine,Washington,3004,US-Canada Border,Feb 1997,Personal Vehicle Passengers,250000,49.0,-122.75,POINT (-122.75 49.0)\n"
        + "Blaine,Washington,3004,US-Canada Border,Mar 1997,Pedestrians,,49.0,-122.75,POINT (-122.75 49.0)\n"
        + "Blaine,Washington,3004,US-Canada Border,Apr 1997,Pedestrians,-5,49.0,-122.75,POINT (-122.75 49.0)\n",
        encoding="utf-8",
    )
    return path
