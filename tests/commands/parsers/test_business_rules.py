"""Tests for CRM, project and analytics rules."""

from voicecommands.commands.parsers import analytics, crm, projects


def _parse(module, text: str):
    text = text.strip()
    return module.parse(text.lower(), text)


class TestCrmRules:
    def test_contact_with_email(self):
        result = _parse(crm, "add contact Jane Doe email jane@doe.com")
        assert result.command.to_dict() == {"type": "create_contact", "name": "Jane Doe", "email": "jane@doe.com"}
        assert result.confidence == 0.95

    def test_log_call(self):
        result = _parse(crm, "log a call with Jane about pricing")
        assert result.command.to_dict() == {
            "type": "log_interaction",
            "contactName": "Jane",
            "interactionType": "call",
            "summary": "pricing",
        }

    def test_log_without_summary_describes_itself(self):
        result = _parse(crm, "log a meeting with Sam")
        assert result.command.summary == "meeting with Sam"

    def test_hot_leads(self):
        result = _parse(crm, "show hot leads")
        assert result.command.to_dict() == {"type": "list_leads", "filter": "hot"}

    def test_all_leads_by_default(self):
        assert _parse(crm, "show my leads").command.filter == "all"

    def test_deal_value_with_magnitude(self):
        result = _parse(crm, "create deal Acme renewal worth 50k")
        assert result.command.to_dict() == {"type": "create_deal", "title": "Acme renewal", "value": 50000.0}

    def test_lead_status(self):
        result = _parse(crm, "mark lead Acme as qualified")
        assert result.command.to_dict() == {"type": "update_lead_status", "leadName": "Acme", "status": "qualified"}

    def test_pipeline(self):
        assert _parse(crm, "show my pipeline").name == "get_pipeline_summary"

    def test_follow_up(self):
        result = _parse(crm, "schedule a follow up with Dana next tuesday about the contract")
        assert result.command.to_dict() == {
            "type": "schedule_followup",
            "contactName": "Dana",
            "followupDate": "next_tuesday",
            "note": "the contract",
        }

    def test_contact_history(self):
        result = _parse(crm, "when did I last talk to Sam?")
        assert result.command.to_dict() == {"type": "get_contact_history", "contactName": "Sam"}


class TestProjectRules:
    def test_create_project(self):
        result = _parse(projects, "create a project called Apollo due next month with high priority")
        assert result.command.to_dict() == {
            "type": "create_project",
            "name": "Apollo",
            "deadline": "next_month",
            "priority": "high",
        }

    def test_active_projects(self):
        result = _parse(projects, "show active projects")
        assert result.command.to_dict() == {"type": "list_projects", "filter": "active"}

    def test_assign_member(self):
        result = _parse(projects, "add Sam to project Apollo as designer")
        assert result.command.to_dict() == {
            "type": "assign_team_member",
            "projectName": "Apollo",
            "memberName": "Sam",
            "role": "designer",
        }

    def test_project_status(self):
        result = _parse(projects, "how is project Apollo going?")
        assert result.command.to_dict() == {"type": "get_project_status", "projectName": "Apollo"}

    def test_add_task_to_sprint(self):
        result = _parse(projects, "add task 12 to the sprint")
        assert result.command.to_dict() == {"type": "add_to_sprint", "taskId": "12"}

    def test_selection_is_left_to_context(self):
        assert _parse(projects, "add this to the sprint") is None

    def test_burndown(self):
        assert _parse(projects, "show sprint burndown").command.to_dict() == {"type": "get_sprint_burndown"}
        assert _parse(projects, "show the burndown chart").command.to_dict() == {"type": "get_sprint_burndown"}

    def test_link_tasks_to_epic(self):
        result = _parse(projects, "link tasks 12, 13 and 14 to epic onboarding")
        assert result.command.to_dict() == {
            "type": "link_tasks_to_epic",
            "epicId": "onboarding",
            "taskIds": ["12", "13", "14"],
        }


class TestAnalyticsRules:
    def test_compare_periods(self):
        result = _parse(analytics, "compare revenue between january and february")
        assert result.command.to_dict() == {
            "type": "compare_periods",
            "metric": "revenue",
            "period1": "january",
            "period2": "february",
        }

    def test_compare_named_periods(self):
        result = _parse(analytics, "compare revenue this month vs last month")
        assert result.command.to_dict() == {
            "type": "compare_periods",
            "metric": "revenue",
            "period1": "this month",
            "period2": "last month",
        }

    def test_alert(self):
        result = _parse(analytics, "set an alert when revenue drops below 1000")
        assert result.command.to_dict() == {
            "type": "set_alert",
            "metric": "revenue",
            "threshold": 1000.0,
            "condition": "below",
        }

    def test_forecast(self):
        result = _parse(analytics, "forecast revenue for the next 3 months")
        assert result.command.to_dict() == {"type": "get_forecast", "metric": "revenue", "periods": 3}

    def test_cohort_analysis(self):
        result = _parse(analytics, "run a cohort analysis")
        assert result.command.to_dict() == {"type": "run_analysis", "analysisType": "cohort"}

    def test_trends(self):
        result = _parse(analytics, "show revenue trends for the last quarter")
        assert result.command.to_dict() == {"type": "get_trends", "metric": "revenue", "timeRange": "quarter"}

    def test_export_metric_list(self):
        result = _parse(analytics, "export revenue and churn metrics as xlsx")
        assert result.command.to_dict() == {
            "type": "export_analytics",
            "format": "excel",
            "metrics": ["revenue", "churn"],
        }

    def test_kpis(self):
        assert _parse(analytics, "show my kpis").command.to_dict() == {"type": "get_kpi_summary"}

    def test_schedule_report(self):
        result = _parse(analytics, "schedule a weekly sales report to alice and bob")
        assert result.command.to_dict() == {
            "type": "schedule_report",
            "reportType": "sales",
            "frequency": "weekly",
            "recipients": ["alice", "bob"],
        }
