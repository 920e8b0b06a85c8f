"""
Turns a raw Lighthouse result (``lhr``) into per-category reports.

Findings keep the order of the category's ``auditRefs``; the first five
imperfect audits are the "top" issues.
"""
from typing import Any, Dict, List, Mapping

from app.features.analysis.schemas.analysis import CategoryReport, CategoryScores, Finding
from app.features.analysis.services.scoring import normalize_score, round_half_up

MAX_FINDINGS = 5
NO_DESCRIPTION = "No additional details available."
NOT_APPLICABLE = "N/A"

# lhr category id -> response key
CATEGORY_KEYS = {
    "performance": "performance",
    "accessibility": "accessibility",
    "best-practices": "bestPractices",
}


def _mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def extract_findings(report: Mapping[str, Any], category: str) -> List[Finding]:
    categories = _mapping(_mapping(report).get("categories"))
    audits = _mapping(_mapping(report).get("audits"))

    audit_refs = _mapping(categories.get(category)).get("auditRefs") or []
    if not isinstance(audit_refs, list):
        return []

    findings: List[Finding] = []
    for ref in audit_refs:
        audit_id = _mapping(ref).get("id")
        audit = audits.get(audit_id) if isinstance(audit_id, str) else None
        if not isinstance(audit, Mapping):
            continue
        # no "score" key at all means the audit did not apply
        if "score" not in audit or audit["score"] == 1:
            continue

        score = audit["score"]
        if score is not None and (isinstance(score, bool) or not isinstance(score, (int, float))):
            continue
        findings.append(
            Finding(
                title=audit.get("title") or "",
                description=audit.get("description") or NO_DESCRIPTION,
                score=NOT_APPLICABLE if score is None else round_half_up(score * 100),
            )
        )
        if len(findings) == MAX_FINDINGS:
            break

    return findings


def build_category_report(report: Mapping[str, Any], category: str) -> CategoryReport:
    categories = _mapping(_mapping(report).get("categories"))
    return CategoryReport(
        score=normalize_score(_mapping(categories.get(category)).get("score")),
        reasons=extract_findings(report, category),
    )


def build_category_reports(report: Mapping[str, Any]) -> CategoryScores:
    reports: Dict[str, CategoryReport] = {
        key: build_category_report(report, category)
        for category, key in CATEGORY_KEYS.items()
    }
    return CategoryScores(**reports)
