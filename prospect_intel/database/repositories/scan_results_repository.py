from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from prospect_intel.database.connection import get_connection
from prospect_intel.parsing.models import ParsedEntity, entity_name
from prospect_intel.recognition.models import RecognitionResult
from prospect_intel.scoring.models import ScoredProspect
from prospect_intel.storage.base import BaseResultStore


class ScanResultsRepository(BaseResultStore):
    """Bulk inserts into scan_recognition_results, scan_entities and scan_prospects."""

    def save_recognition_results(
        self, scan_id: str, results: Sequence[RecognitionResult]
    ) -> None:
        if not results:
            return
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.executemany(
                    """
                    INSERT INTO scan_recognition_results (
                        scan_id, source_image_id, text, lines, blocks,
                        confidence, language, slice_count, error_message
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    [
                        (
                            scan_id,
                            r.source_image_id,
                            r.text,
                            Jsonb(r.lines),
                            Jsonb([list(span) for span in r.blocks]),
                            r.confidence,
                            r.language.value,
                            r.slice_count,
                            r.error_message,
                        )
                        for r in results
                    ],
                )
            conn.commit()

    def save_scan_results(
        self,
        scan_id: str,
        entities: Sequence[ParsedEntity],
        prospects: Sequence[ScoredProspect],
    ) -> None:
        """Insert entities and prospects in one transaction.

        A failure rolls back both inserts when the pooled connection is
        returned, so a scan never keeps half of its results.
        """
        if not entities and not prospects:
            return
        with get_connection() as conn:
            with conn.cursor() as cur:
                _insert_entities(cur, scan_id, entities)
                _insert_prospects(cur, scan_id, prospects)
            conn.commit()

    def discard_scan_results(self, scan_id: str) -> None:
        with get_connection() as conn:
            conn.execute("DELETE FROM scan_entities WHERE scan_id = %s", (scan_id,))
            conn.execute("DELETE FROM scan_prospects WHERE scan_id = %s", (scan_id,))
            conn.commit()

    def find_prospects(self, scan_id: str) -> list[dict[str, Any]]:
        """Prospect rows for a scan, highest score first. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT name, normalized_name, score, bucket, source_kind,
                           source_image_id, line_index, metadata
                    FROM scan_prospects
                    WHERE scan_id = %s
                    ORDER BY score DESC, id
                    """,
                    (scan_id,),
                )
                return list(cur.fetchall())

    def count_entities(self, scan_id: str) -> int:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM scan_entities WHERE scan_id = %s", (scan_id,))
                row = cur.fetchone()
        return int(row[0]) if row else 0

    def delete_scan(self, scan_id: str) -> None:
        with get_connection() as conn:
            for table in ("scan_recognition_results", "scan_entities", "scan_prospects"):
                conn.execute(f"DELETE FROM {table} WHERE scan_id = %s", (scan_id,))  # noqa: S608
            conn.commit()


def _insert_entities(
    cur: psycopg.Cursor[Any], scan_id: str, entities: Sequence[ParsedEntity]
) -> None:
    if not entities:
        return
    cur.executemany(
        """
        INSERT INTO scan_entities (
            scan_id, kind, name, source_image_id, line_index, payload
        )
        VALUES (%s, %s, %s, %s, %s, %s)
        """,
        [
            (
                scan_id,
                e.kind,
                entity_name(e),
                e.provenance.source_image_id,
                e.provenance.line_index,
                Jsonb(asdict(e)),
            )
            for e in entities
        ],
    )


def _insert_prospects(
    cur: psycopg.Cursor[Any], scan_id: str, prospects: Sequence[ScoredProspect]
) -> None:
    if not prospects:
        return
    cur.executemany(
        """
        INSERT INTO scan_prospects (
            scan_id, name, normalized_name, score, bucket,
            source_kind, source_image_id, line_index, metadata
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        """,
        [
            (
                scan_id,
                p.name,
                p.normalized_name,
                p.score,
                p.bucket.value,
                p.source_kind,
                p.provenance.source_image_id,
                p.provenance.line_index,
                Jsonb(p.metadata),
            )
            for p in prospects
        ],
    )
