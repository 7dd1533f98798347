from __future__ import annotations

import pytest

from shark_attacks.utils.config import cleaning_settings

HEADERS = [
    "Case Number", "Date", "Year", "Type", "Country", "Area", "Location",
    "Activity", "Name", "Sex ", "Age", "Injury", "Fatal (Y/N)", "Time",
    "Species ", "Investigator or Source", "pdf", "href formula", "href",
    "Case Number.1", "Case Number.2", "original order",
]


def _row(**values):
    keys = {
        "case": "Case Number", "date": "Date", "year": "Year", "type": "Type",
        "country": "Country", "area": "Area", "location": "Location",
        "activity": "Activity", "name": "Name", "sex": "Sex ", "age": "Age",
        "injury": "Injury", "fatal": "Fatal (Y/N)", "time": "Time",
        "species": "Species ", "source": "Investigator or Source", "pdf": "pdf",
        "order": "original order",
    }
    row = {h: None for h in HEADERS}
    for k, v in values.items():
        row[keys[k]] = v
    if row["Case Number"]:
        row["Case Number.1"] = row["Case Number"]
        row["Case Number.2"] = row["Case Number"]
        row["href formula"] = f"http://sharkattackfile.net/{row['Case Number']}.pdf"
        row["href"] = row["href formula"]
    return row


RAW_ROWS = [
    _row(case="2018-06-25", date="25-Jun-2018", year="2018", type="Boating", country="USA",
         area="California", location="Oceanside, San Diego County", activity="Paddling",
         name="Julie Wolfe", sex="F", age="57",
         injury="No injury to occupant, outrigger canoe and paddle damaged", fatal="N",
         time="18h00", species="White shark", source="R. Collier, GSAF", order="6303"),
    _row(case="2018.06.18", date="18-Jun-2018", year="2018", type="Unprovoked", country="USA",
         area="Georgia", location="St. Simon Island, Glynn County", activity="Standing",
         name="Adyson McNeely ", sex="F", age="11", injury="Minor injury to left thigh",
         fatal="N", time="14:00  -15:00", species=None, source="K.McMurray TrackingSharks.com",
         order="6302"),
    _row(case="2018.06.09", date="09-Jun-2018", year="2018", type="Unprovoked",
         country="United Arab Emirates (UAE)", location="Dubai", activity="Swimming",
         name="male", injury="Lacerations to right thigh and left hand", fatal="UNKNOWN",
         time="1430", species="3 m white shark", order="6301"),
    _row(case="1894.07.15.R", date="15-Jul-1894", year="1894", type="Unprovoked", country="FRANCE",
         activity="Bathing", name="la Badine, Hyčres,", sex="M", injury="No injury", fatal="Y",
         time="daybreak", species="Invalid", order="1200"),
    _row(case="2005.08.13", date="13-Aug-2005", year="2005", type="Unprovoked", country="USA",
         area="Hawaii", activity="Surfing", name="Brian Kang", sex="lli",
         injury="Left foot bitten", fatal="N", time="Afternoon", species="Tiger shark, 3.5 m",
         order="4500"),
    # not shark attacks
    _row(case="2016.01.01", date="01-Jan-2016", year="2016", type="Invalid", country="AUSTRALIA",
         activity="Swimming", name="John Doe", sex="M", injury="Hoax, no shark involvement",
         fatal="N", order="6000"),
    _row(case="2015.03.03", date="03-Mar-2015", year="2015", type="Invalid", country="USA",
         activity="Wading", name="Jane Roe", sex="F", injury="Laceration to foot",
         fatal="N", species="Stingray, not a shark", order="5999"),
    _row(case="2014.02.02", date="02-Feb-2014", year="2014", type="Invalid", country="USA",
         activity="Suicide", name="unknown", injury="FATAL", fatal="Y", order="5998"),
    # no original order and nothing else worth keeping
    {"Case Number": "0", "Year": "0"},
    # spreadsheet padding
    {h: None for h in HEADERS},
    _row(case="1950.01.05", date="05-Jan-1950", year="1950", type="Sea Disaster",
         country="St. Maartin", activity="Ship sank", name="crew",
         injury="FATAL, remains recovered", time="Night", order="2500"),
    _row(case="1960.07.04", date="04-Jul-1960", year="1960", type="Unprovoked",
         country="EGYPT ?", activity="Wading", name="a girl", injury="Right calf bitten",
         fatal="n", time="Noon", order="2600"),
    # two rows sharing one original order value
    _row(case="1970.05.05.b", date="05-May-1970", year="1970", type="Provoked", country="USA",
         activity="Fishing", name="Tom Ray", sex="M", injury="Bitten on the hand by netted shark",
         fatal="N", time="0500hrs", species="Nurse shark", order="3000"),
    _row(case="1970/05/05.a", date="05-May-1970", year="1970", type="Unprovoked", country="USA",
         activity="Swimming", name="Ann Lee", sex="F", injury="Bitten on the face",
         fatal="N", time="3 p.m.", species="Blue pointer", order="3000"),
]


@pytest.fixture
def raw_rows():
    return [dict(r) for r in RAW_ROWS]


@pytest.fixture
def settings():
    return cleaning_settings()
