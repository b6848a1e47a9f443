from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from bytefreq.profile.profiler import Profiler
from bytefreq.report.metrics import column_summary, pattern_shares

TIMESTAMP_FORMAT = "%Y%m%d %H:%M:%S"


class PatternRow(BaseModel):
    pattern: str
    count: int
    example: str


class ColumnProfile(BaseModel):
    index: int
    name: str
    patterns: list[PatternRow] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return f"col_{self.index:05d}_{self.name}"


class ProfileReport(BaseModel):
    generated_at: datetime
    grain: str
    format: str
    record_count: int
    field_counts: dict[int, int] = Field(default_factory=dict)
    columns: list[ColumnProfile] = Field(default_factory=list)

    def column(self, name: str) -> ColumnProfile | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None


def build_report(profiler: Profiler, now: datetime | None = None) -> ProfileReport:
    columns = []
    for idx, name in profiler.registry.items():
        rows = [
            PatternRow(pattern=stat.pattern, count=stat.count, example=stat.example)
            for stat in profiler.aggregator.ranked(idx)
        ]
        columns.append(ColumnProfile(index=idx, name=name, patterns=rows))
    return ProfileReport(
        generated_at=now or datetime.now(),
        grain=profiler.config.grain.value,
        format=profiler.config.format,
        record_count=profiler.record_count,
        field_counts=dict(sorted(profiler.field_counts.items())),
        columns=columns,
    )


def render_text(report: ProfileReport) -> str:
    lines = [
        "",
        f"Data Profiling Report: {report.generated_at.strftime(TIMESTAMP_FORMAT)}",
        f"Examined rows: {report.record_count}",
        "",
        "FieldsPerLine:",
    ]
    for field_count, rows in report.field_counts.items():
        lines.append(f"{field_count} fields: {rows} rows")
    lines.append("")
    lines.append(f"{'column':<32}\t{'count':<8}\t{'pattern':<8}\t{'example':<32}")
    lines.append(f"{'':-<32}\t{'':-<8}\t{'':-<8}\t{'':-<32}")
    for col in report.columns:
        for row in col.patterns:
            lines.append(f"{col.label}\t{row.count:<8}\t{row.pattern:<8}\t{row.example:<32}")
    return "\n".join(lines) + "\n"


def report_to_dict(report: ProfileReport) -> dict[str, Any]:
    payload = report.model_dump(mode="json")
    for col, col_payload in zip(report.columns, payload["columns"]):
        counts = [row.count for row in col.patterns]
        col_payload["summary"] = column_summary(counts)
        for row_payload, share in zip(col_payload["patterns"], pattern_shares(counts)):
            row_payload["share"] = round(share, 6)
    return payload
