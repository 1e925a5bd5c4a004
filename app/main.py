"""
Streamlit Frontend for Condo Finance

This is the dashboard the building's administration looks at every month.

DESIGN PRINCIPLES:
1. The page only renders; every number comes from DashboardFlow
2. Uploading a file replaces that source and nothing else
3. Clear notices when a file cannot be read
4. Months without a balance snapshot are never drawn as zero

Run with:
    streamlit run app/main.py
"""

from datetime import date

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from condo_finance.config import check_data_sources, get_settings
from condo_finance.models import (
    MONTH_NAMES,
    Accumulated,
    DashboardView,
    DatasetKind,
    SpecificMonth,
)
from condo_finance.orchestrator import DashboardFlow, create_dashboard_flow
from condo_finance.parsing import format_brl


settings = get_settings()

# Page configuration
st.set_page_config(
    page_title=settings.app_title,
    page_icon="🏢",
    layout="wide",
    initial_sidebar_state="expanded",
)

COLORS = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899", "#06b6d4", "#84cc16"]
NEGATIVE_COLOR = "#ef4444"
FUND_COLOR = "#8b5cf6"

UPLOAD_LABELS = {
    DatasetKind.EXPENSES: "Upload Despesas",
    DatasetKind.FUNDS: "Upload Fundos",
    DatasetKind.BALANCES: "Upload Saldo Conta",
}

ERROR_MESSAGES = {
    DatasetKind.EXPENSES: "Erro ao ler arquivo de despesas.",
    DatasetKind.FUNDS: "Erro ao ler arquivo de fundos.",
    DatasetKind.BALANCES: "Erro ao ler arquivo de saldos.",
}


def get_flow() -> DashboardFlow:
    """Get this session's flow, creating it on first access."""
    if "flow" not in st.session_state:
        st.session_state.flow = create_dashboard_flow(settings)
        st.session_state.loaded_uploads = {}
    return st.session_state.flow


def main():
    """Main application entry point."""
    flow = get_flow()
    today = date.today()

    render_sidebar(flow)

    st.title(f"🏢 {settings.app_title}")
    st.caption(f"Situação das Contas · {settings.organization_name}")

    years = flow.available_years(today)
    col1, col2 = st.columns([1, 4])
    with col1:
        year = st.selectbox("Ano", options=years, index=years.index(flow.default_year(today)))
    with col2:
        month_option = st.radio(
            "Período",
            options=[-1] + list(range(12)),
            format_func=lambda i: "Acumulado" if i == -1 else MONTH_NAMES[i],
            horizontal=True,
        )
    selection = Accumulated() if month_option == -1 else SpecificMonth(month_index=month_option)

    view = flow.view(year, selection, today)

    render_kpis(view)
    st.markdown("---")
    render_evolution(view)
    st.markdown("---")
    render_compositions(view)

    st.markdown("---")
    st.caption(f"© {today.year} {settings.organization_name}. Todos os direitos reservados.")


def render_sidebar(flow: DashboardFlow):
    """Upload panel and data source status."""
    st.sidebar.title("📥 Importação de Arquivos")

    for kind, label in UPLOAD_LABELS.items():
        uploaded_file = st.sidebar.file_uploader(label, type=["csv"], key=f"upload_{kind.value}")
        if uploaded_file is None:
            continue
        # Streamlit reruns the script on every interaction; load each file once
        if st.session_state.loaded_uploads.get(kind) == uploaded_file.file_id:
            continue
        count, error = flow.upload(kind, uploaded_file, source_name=uploaded_file.name)
        if error is None:
            st.sidebar.success(f"{uploaded_file.name}: {count} registros")
        else:
            st.sidebar.error(ERROR_MESSAGES[kind])
        st.session_state.loaded_uploads[kind] = uploaded_file.file_id

    st.sidebar.markdown(
        "*Selecione os arquivos CSV correspondentes para atualizar as "
        "informações do dashboard.*"
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Dados carregados")
    for kind in DatasetKind:
        st.sidebar.markdown(f"**{kind.value}:** {flow.data.record_count(kind)} registros")

    preload = check_data_sources(settings)
    if any(preload.values()):
        with st.sidebar.expander("Arquivos padrão"):
            for kind_value, exists in preload.items():
                st.markdown(f"{'✅' if exists else '❌'} {kind_value}")

    recent = flow.audit_logger.recent_events[:5]
    if recent:
        with st.sidebar.expander("Histórico"):
            for event in recent:
                st.markdown(f"- {event.timestamp:%H:%M:%S} {event.description}")


def render_kpis(view: DashboardView):
    """Four headline numbers."""
    st.subheader(view.kpis.label)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Receitas", format_brl(view.kpis.revenue))
    col2.metric("Despesas", format_brl(view.kpis.expenses))
    col3.metric("Saldo Conta Ordinária", format_brl(view.kpis.balance))
    col4.metric("Patrimônio Total", format_brl(view.kpis.net_worth))


def render_evolution(view: DashboardView):
    """Revenue vs expenses bars and balance area, months with data only."""
    col1, col2 = st.columns(2)

    with col1:
        st.markdown("#### Receitas vs Despesas")
        if view.revenue_expense_evolution:
            names = [p.name for p in view.revenue_expense_evolution]
            fig = go.Figure()
            fig.add_bar(
                name="Receitas",
                x=names,
                y=[float(p.revenue) for p in view.revenue_expense_evolution],
                marker_color=COLORS[1],
            )
            fig.add_bar(
                name="Despesas",
                x=names,
                y=[float(p.expenses) for p in view.revenue_expense_evolution],
                marker_color=COLORS[3],
            )
            fig.update_layout(barmode="group", height=320, margin=dict(t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("Sem dados de saldo para este ano")

    with col2:
        st.markdown("#### Evolução Conta Ordinária")
        if view.balance_evolution:
            fig = go.Figure(go.Scatter(
                name="Saldo",
                x=[p.name for p in view.balance_evolution],
                y=[float(p.balance) for p in view.balance_evolution],
                fill="tozeroy",
                line=dict(color=COLORS[0], width=3, shape="spline"),
            ))
            fig.update_layout(height=320, margin=dict(t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("Sem dados de saldo para este ano")


def render_compositions(view: DashboardView):
    """Expense donut with share table, and the fund ranking."""
    col1, col2 = st.columns(2)

    with col1:
        st.markdown(f"#### Composição de Despesas ({view.kpis.label})")
        if view.expense_composition:
            fig = px.pie(
                names=[s.name for s in view.expense_composition],
                values=[float(s.value) for s in view.expense_composition],
                hole=0.6,
                color_discrete_sequence=COLORS,
            )
            fig.update_layout(height=320, margin=dict(t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
            st.table([
                {"Categoria": s.name, "Valor": format_brl(s.value), "%": f"{s.share}%"}
                for s in view.expense_composition
            ])
        else:
            st.info("Sem despesas para este período")

    with col2:
        st.markdown("#### Situação dos Fundos (Valor Atual)")
        if view.has_fund_data:
            positions = list(reversed(view.fund_composition))
            fig = go.Figure(go.Bar(
                name="Valor Atual",
                orientation="h",
                x=[float(p.current_value) for p in positions],
                y=[p.fund_name for p in positions],
                marker_color=[NEGATIVE_COLOR if p.is_negative else FUND_COLOR for p in positions],
            ))
            fig.update_layout(height=320, margin=dict(t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("Sem dados de fundos para este período")


if __name__ == "__main__":
    main()
