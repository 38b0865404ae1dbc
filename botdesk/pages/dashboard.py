"""
Dashboard page: summary cards and the revenue chart.
"""

import asyncio

from nicegui import ui

from botdesk.components import load_section, page_frame
from botdesk.services import Services


def _summary_card(title: str, value: str, icon: str, color: str):
    with ui.card().classes('flex-1 min-w-48 bg-slate-900 border border-slate-800'):
        with ui.row().classes('w-full items-center justify-between'):
            ui.label(title).classes('text-sm text-gray-400')
            ui.icon(icon, color=color).classes('text-xl')
        ui.label(value).classes('text-2xl font-bold text-white')


def sales_chart_options(sales) -> dict:
    """ECharts option for the revenue bar chart."""
    return {
        'tooltip': {'trigger': 'axis'},
        'xAxis': {'type': 'category', 'data': [m.date for m in sales], 'axisLabel': {'color': '#94a3b8'}},
        'yAxis': {'type': 'value', 'axisLabel': {'color': '#94a3b8'},
                  'splitLine': {'lineStyle': {'color': '#334155', 'type': 'dashed'}}},
        'series': [{
            'name': 'Sales (R$)',
            'type': 'bar',
            'data': [m.amount for m in sales],
            'itemStyle': {'color': '#10b981', 'borderRadius': [4, 4, 0, 0]},
        }],
    }


def create_dashboard_page(services: Services):

    @ui.page('/')
    def dashboard_page():
        with page_frame('Dashboard', '/'):
            ui.label('Control Panel').classes('text-3xl font-bold text-white')
            content = ui.column().classes('w-full gap-6')

        async def fetch():
            return await asyncio.gather(services.metrics.get_sales_data(), services.metrics.get_summary())

        def render(data):
            sales, summary = data
            with ui.row().classes('w-full gap-6'):
                _summary_card('Total Revenue', f'R$ {summary.revenue:,.2f}', 'payments', 'green')
                _summary_card('Active Bots', str(summary.active_bots), 'monitor_heart', 'blue')
                _summary_card('Conversations', str(summary.total_conversations), 'chat', 'indigo')
                _summary_card('Conversion Rate', f'{summary.conversion_rate}%', 'group', 'pink')

            with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                ui.label('Revenue Overview').classes('text-lg font-semibold text-white')
                if sales:
                    ui.echart(sales_chart_options(sales)).classes('w-full h-80')
                else:
                    with ui.column().classes('w-full h-80 items-center justify-center border border-dashed border-slate-800 rounded-lg'):
                        ui.icon('monitor_heart').classes('text-3xl text-gray-600')
                        ui.label('No sales recorded in this period.').classes('text-gray-500')

        ui.timer(0.1, lambda: load_section(content, fetch, render), once=True)
