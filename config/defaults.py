from config.schema import AppConfig, AuthConfig, LoggingConfig, StorageConfig


# ─── STUNDENPLAN-RASTER ───────────────────────────────────────────────────────

# Kanonische Tagesreihenfolge (Dushanba .. Shanba)
DAY_OPTIONS: tuple[str, ...] = ("Dush", "Sesh", "Chor", "Pay", "Jum", "Shan")

PERIOD_OPTIONS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)

# Para → Zeitspanne
PERIOD_TIME_MAP: dict[int, str] = {
    1: "08:30-09:50",
    2: "10:00-11:20",
    3: "11:30-12:50",
    4: "13:00-14:20",
    5: "14:30-15:50",
    6: "16:00-17:20",
}

PERIOD_BY_TIME: dict[str, int] = {t: p for p, t in PERIOD_TIME_MAP.items()}


# ─── LEHRKRÄFTE ───────────────────────────────────────────────────────────────

SPECIALIZATION_OPTIONS: tuple[str, ...] = (
    "Matematika",
    "Fizika",
    "Kompyuter grafikasi va dizayn",
    "Kompyuter grafikasi va dizayn O'.A",
    "Tarix",
    "Ona tili va adabiyot",
    "Ingliz tili",
    "Biologiya",
    "Kimyo",
    "Geografiya",
    "Dasturlash",
    "Raqamli texnologiyalar",
    "Axborot xavfsizligi",
    "Tikuvchilik",
    "Avtomobil",
    "Elektromontyor",
    "Oshpazlik",
    "Melioratsiya",
)


# ─── STUDIERENDE ──────────────────────────────────────────────────────────────

COURSE_OPTIONS: tuple[str, ...] = ("1-kurs", "2-kurs")

EDUCATION_FORM_OPTIONS: tuple[str, ...] = ("Kunduzgi", "Dual")

PROGRAM_OPTIONS: tuple[str, ...] = (
    "Tikuvchilik",
    "Tikuv mahsulotlari dizayneri",
    "Raqamli axborotlar",
    "Kompyuter grafikasi",
    "Melioratsiya",
    "Avtomobil",
    "Oshpazlik",
    "Sotuv-nazorat kassiri",
    "Elektromontyor",
)

# Gruppen: 1. Kurs "1-26".."24-26", 2. Kurs "1-25".."24-25"
FIRST_COURSE_GROUPS: list[str] = [f"{i}-26" for i in range(1, 25)]
SECOND_COURSE_GROUPS: list[str] = [f"{i}-25" for i in range(1, 25)]

GROUPS_BY_COURSE: dict[str, list[str]] = {
    "1-kurs": FIRST_COURSE_GROUPS,
    "2-kurs": SECOND_COURSE_GROUPS,
}


# ─── STARTDATEN (beim ersten Lesen gespeichert) ───────────────────────────────

SEED_LESSONS: list[dict] = [
    {"id": "l1", "day": "Dush", "period": 1, "suratSubject": "Matematika",
     "maxrajSubject": "Tarix", "room": "A-101"},
    {"id": "l2", "day": "Sesh", "period": 2, "suratSubject": "Dasturlash",
     "room": "B-203"},
]

# Passwörter werden beim Seeding erzeugt
SEED_TEACHERS: list[dict] = [
    {"id": "t1", "fullName": "Aliyev Anvar", "username": "anvar",
     "phone": "+998 90 123 45 67", "department": "Dasturiy injiniring"},
    {"id": "t2", "fullName": "Qodirova Mohira", "username": "mohira",
     "phone": "+998 93 765 43 21", "department": "Axborot xavfsizligi"},
]

SEED_STUDENTS: list[dict] = [
    {"id": "s1", "fullName": "Mohira Qahhorova", "course": "1-kurs",
     "educationForm": "Kunduzgi", "program": "Kompyuter grafikasi", "group": "5-26"},
    {"id": "s2", "fullName": "Jahongir Ismoilov", "course": "2-kurs",
     "educationForm": "Dual", "program": "Tikuvchilik", "group": "12-25"},
]

SEED_LIBRARY: list[dict] = [
    {"id": "l1", "title": "Algoritmlar asoslari", "author": "T. X", "url": "#"},
    {"id": "l2", "title": "Web dasturlash", "author": "N. Y", "url": "#"},
]


def default_app_config() -> AppConfig:
    """Standard-Konfiguration: Daten unter ./data_store, Log-Level WARNING."""
    return AppConfig(
        college_name="Texnikum",
        storage=StorageConfig(data_dir="data_store"),
        auth=AuthConfig(),
        logging=LoggingConfig(level="WARNING"),
    )
