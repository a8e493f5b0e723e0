from enum import StrEnum


class College(StrEnum):
    CCS = 'CCS'
    GCOE = 'GCOE'
    COS = 'COS'
    CLA = 'CLA'
    RVRCOB = 'RVRCOB'
    BAGCED = 'BAGCED'
    SOE = 'SOE'

    @property
    def display_name(self) -> str:
        return COLLEGE_NAMES[self]


COLLEGE_NAMES: dict[College, str] = {
    College.CCS: 'College of Computer Studies',
    College.GCOE: 'Gokongwei College of Engineering',
    College.COS: 'College of Science',
    College.CLA: 'College of Liberal Arts',
    College.RVRCOB: 'Ramon V. del Rosario College of Business',
    College.BAGCED: 'Br. Andrew Gonzalez College of Education',
    College.SOE: 'School of Economics',
}
