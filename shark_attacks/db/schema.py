"""
shark_attacks/db/schema.py - DDL definitions

Single source of truth for the DuckDB tables written by this project.

Naming conventions:
- Data tables: shark_attacks_raw (untouched copy), shark_attacks (clean)
- Ops tables: ops_ prefix
- Timestamps: started_at, ended_at, created_at
"""
from __future__ import annotations

# =============================================================================
# CLEAN TABLE
# =============================================================================

SHARK_ATTACKS_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    -- Primary key (dense 1..N, assigned after filtering)
    incident_number INTEGER PRIMARY KEY,

    -- Identification
    case_number VARCHAR,
    date DATE,
    year INTEGER,
    type VARCHAR,

    -- Place
    country VARCHAR,
    area VARCHAR,
    location VARCHAR,

    -- Victim
    activity VARCHAR,
    name VARCHAR,
    sex VARCHAR,
    age VARCHAR,

    -- Outcome
    injury VARCHAR,
    fatal VARCHAR,
    time VARCHAR,

    -- Shark
    shark_description VARCHAR,
    species_identified VARCHAR,

    -- Source
    investigator_or_source VARCHAR,

    -- Derived
    body_part_injured VARCHAR
);
"""

# =============================================================================
# OPS
# =============================================================================

OPS_CLEANING_RUNS_DDL = """
CREATE TABLE IF NOT EXISTS ops_cleaning_runs (
    run_id VARCHAR,
    job_name VARCHAR,
    started_at TIMESTAMP,
    ended_at TIMESTAMP,
    status VARCHAR,
    params_json VARCHAR,
    raw_rows BIGINT,
    empty_rows_deleted BIGINT,
    non_shark_rows_deleted BIGINT,
    devoid_rows_deleted BIGINT,
    clean_rows BIGINT,
    duplicate_rows BIGINT,
    exit_code INTEGER
);
"""

OPS_DQ_FINDINGS_DDL = """
CREATE TABLE IF NOT EXISTS ops_dq_findings (
    finding_id VARCHAR,
    run_id VARCHAR,
    check_name VARCHAR,
    severity VARCHAR,
    message VARCHAR,
    created_at TIMESTAMP,
    context_json VARCHAR,
    is_active BOOLEAN
);
"""
