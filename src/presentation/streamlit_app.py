import logging

import streamlit as st

from src.infrastructure.config import Settings
from src.infrastructure.catalog.json_catalog import CatalogLoadError, provider_from_settings
from src.application.use_cases import InvestigationUseCase, parse_number
from src.application.wizard import InvestigationWizard
from src.application.schemas import InvestigationReport
from src.domain.catalog import EDUCATIONAL_CONTENT, group_by_category
from src.domain.models import SeverityLevel, age_group_for


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **For Healthcare Professionals.** An advanced clinical decision aid utilizing "
    "phenotype-based logic to screen and recognize Cystic Fibrosis patterns across "
    "different age groups. For educational use only."
)

SEVERITY_ICONS = {
    SeverityLevel.CRITICAL: "🔴",
    SeverityLevel.HIGH: "🟠",
    SeverityLevel.MODERATE: "🟡",
    SeverityLevel.LOW: "🟢",
}


def severity_color(level: SeverityLevel) -> str:
    if level == SeverityLevel.CRITICAL:
        return "red"
    if level == SeverityLevel.HIGH:
        return "orange"
    if level == SeverityLevel.MODERATE:
        return "violet"
    return "green"


def risk_color(score: int) -> str:
    if score > 60:
        return "red"
    if score > 30:
        return "orange"
    return "green"


def _init_session_state(settings: Settings) -> bool:
    if "wizard" in st.session_state:
        return True
    try:
        provider = provider_from_settings(settings)
        provider.load_signs()
    except CatalogLoadError as e:
        logger.error("Catalog unavailable: %s", e)
        st.error(f"❌ **Sign catalog unavailable**\n\n{e}")
        return False
    st.session_state.wizard = InvestigationWizard(InvestigationUseCase(provider))
    return True


def _render_profile_step(wizard: InvestigationWizard):
    st.markdown("## 👤 Patient Profile")

    with st.form("profile_form"):
        age = st.text_input(
            "Patient Age (Years)",
            value=wizard.age_input,
            placeholder="e.g. 0.5 for 6 months, or 25",
        )
        sex = st.radio(
            "Biological Sex",
            ["Male", "Female"],
            index=0 if wizard.is_male else 1,
            horizontal=True,
        )
        st.markdown("### 🧪 Sweat Chloride Test Result (Optional)")
        st.caption("If a sweat test has already been performed, enter the chloride concentration (mmol/L).")
        sweat = st.text_input("mmol/L", value=wizard.sweat_input, placeholder="mmol/L")

        submit = st.form_submit_button("Continue to Phenotype Analysis ➜", use_container_width=True)

    if age:
        st.caption(f"Current Category: **{age_group_for(parse_number(age)).value}**")

    if submit:
        errors = wizard.submit_profile(age, sex == "Male", sweat)
        if errors:
            for error in errors:
                st.error(f"❌ {error}")
            return
        st.rerun()


def _render_signs_step(wizard: InvestigationWizard):
    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown(f"### {wizard.age_input} years • {wizard.age_group.value}")
        st.caption("Select all observed clinical manifestations")
    with col2:
        if st.button("Edit Profile", use_container_width=True):
            wizard.edit_profile()
            st.rerun()

    grouped = group_by_category(wizard.available_signs())
    for category, signs in grouped.items():
        st.markdown(f"#### {category.value} ({len(signs)})")
        for sign in signs:
            label = sign.label + ("  🚩 HIGH SPECIFICITY" if sign.is_red_flag else "")
            checked = st.checkbox(
                label,
                value=sign.id in wizard.selected_ids,
                help=sign.description,
                key=f"sign_{sign.id}",
            )
            if checked != (sign.id in wizard.selected_ids):
                wizard.toggle_sign(sign.id)

    st.divider()
    st.caption(f"{len(wizard.selected_ids)} symptom(s) selected")
    if st.button("Generate Clinical Report 📋", use_container_width=True):
        wizard.generate_report()
        st.rerun()


def _render_report_step(wizard: InvestigationWizard):
    report = wizard.report
    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown("## Investigation Results")
    with col2:
        if st.button("New Patient", use_container_width=True):
            wizard.reset()
            for key in [k for k in st.session_state.keys() if str(k).startswith("sign_")]:
                del st.session_state[key]
            st.rerun()

    score = report.result.probability_score
    st.metric("Phenotype Risk", f"{score}%", f"{report.result.severity_level.value} Suspicion", delta_color="off")
    st.progress(score / 100)
    st.markdown(format_report_markdown(report))


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title=settings.app_title,
        page_icon="🫁",
        layout="centered",
    )

    if not _init_session_state(settings):
        st.stop()

    wizard = st.session_state.wizard

    if wizard.stage != "report":
        st.markdown(f"# {settings.app_title}")
        st.info(DISCLAIMER)

    if wizard.stage == "profile":
        _render_profile_step(wizard)
    elif wizard.stage == "signs":
        _render_signs_step(wizard)
    else:
        _render_report_step(wizard)


def format_report_markdown(report: InvestigationReport) -> str:
    """Format an investigation report as printable markdown."""
    result = report.result
    profile = report.profile
    lines = ["# 📋 Cystic Fibrosis Investigation Report\n"]

    age_text = f"{profile.age:g} years" if profile.age is not None else "Age unknown"
    sex_text = "Male" if profile.is_male else "Female"
    lines.append(f"**Patient Profile:** {age_text} • {sex_text} • {report.age_group.value}\n")

    icon = SEVERITY_ICONS[result.severity_level]
    color = severity_color(result.severity_level)
    lines.append(
        f"## {icon} :{color}[{result.severity_level.value} Suspicion] "
        f"(Risk: :{risk_color(result.probability_score)}[{result.probability_score}%])\n"
    )

    lines.append("## 📝 Recommended Actions")
    if result.recommendations:
        for i, rec in enumerate(result.recommendations, 1):
            lines.append(f"{i}. {rec}")
    else:
        lines.append("- No specific actions recommended")
    lines.append("")

    lines.append("## 🩺 Observed Clinical Manifestations")
    if result.matched_signs:
        for sign in result.matched_signs:
            flag = " 🚩" if sign.is_red_flag else ""
            lines.append(f"**{sign.label}**{flag} _({sign.category.value})_")
            lines.append(f"- {sign.description}")
    else:
        lines.append("_No specific CF-associated phenotypes selected._")
    if report.unknown_sign_ids:
        lines.append(f"_Ignored unrecognised sign(s): {', '.join(report.unknown_sign_ids)}_")
    lines.append("")

    lines.append("## ⚠️ Diagnostic Criteria & Guidelines")
    lines.append(f"**Sweat chloride:** {report.sweat_chloride_interpretation}\n")
    for guide_line in EDUCATIONAL_CONTENT["sweat_chloride_guide"].splitlines():
        lines.append(f"> {guide_line}  ")
    lines.append("")
    lines.append(
        "According to the Cystic Fibrosis Foundation Consensus Guidelines, diagnosis requires "
        "clinical presentation (phenotype) combined with evidence of CFTR dysfunction "
        "(sweat test or genetic analysis)."
    )
    lines.append("_Ref: Farrell PM, et al. J Pediatr. 2017_\n")

    lines.append("## 📖 Understanding CF Progression")
    lines.append(f"**The Importance of Early Management:** {EDUCATIONAL_CONTENT['early_impact']}\n")
    for stage in report.progression:
        marker = " ⬅ current" if stage.is_current else ""
        lines.append(f"**{stage.age_group.value}**{marker}")
        for item in stage.manifestations:
            lines.append(f"- {item}")
        lines.append("")

    lines.append("---")
    lines.append(f"⚠️ {report.disclaimer}")

    return "\n".join(lines)


if __name__ == "__main__":
    main()
