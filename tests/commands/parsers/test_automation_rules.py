"""Tests for scheduling, selection, automation, workflow and sequence rules."""

from voicecommands.commands.parsers import automation, context, scheduling, sequences, workflows


def _parse(module, text: str):
    text = text.strip()
    return module.parse(text.lower(), text)


class TestSchedulingRules:
    def test_recurring_reminder(self):
        result = _parse(scheduling, "every day at 9am remind me to stretch")
        assert result.command.to_dict() == {
            "type": "schedule_command",
            "command": {"type": "create_reminder", "title": "stretch", "reminderAt": "9am"},
            "executeAt": "9am",
            "recurring": True,
            "frequency": "daily",
        }
        assert result.confidence == 0.8

    def test_weekly_routine(self):
        result = _parse(scheduling, "every monday at 9am run the standup routine")
        assert result.command.to_dict() == {
            "type": "schedule_command",
            "command": {"type": "run_routine", "routineName": "standup"},
            "executeAt": "monday at 9am",
            "recurring": True,
            "frequency": "weekly",
        }

    def test_recurrence_unit_is_not_part_of_the_time(self):
        result = _parse(scheduling, "every weekday at 8:30am remind me to check email")
        assert result.command.execute_at == "8:30am"
        assert result.command.command.reminder_at == "8:30am"
        assert result.command.frequency == "daily"

        result = _parse(scheduling, "every day remind me to stretch")
        assert result.command.execute_at == "day"

    def test_one_off(self):
        result = _parse(scheduling, "at 5pm remind me to call mom")
        assert result.command.recurring is False
        assert result.command.frequency is None
        assert result.command.execute_at == "5pm"
        assert result.command.command.title == "call mom"

    def test_run_routine(self):
        result = _parse(scheduling, "run my morning routine")
        assert result.command.to_dict() == {"type": "run_routine", "routineName": "morning"}

    def test_daily_routine_starts_empty(self):
        result = _parse(scheduling, "set up a daily routine called morning at 7am")
        assert result.command.to_dict() == {
            "type": "set_daily_routine",
            "name": "morning",
            "time": "7am",
            "commands": [],
        }

    def test_snooze_durations(self):
        assert _parse(scheduling, "snooze for 15 minutes").command.duration == 15
        assert _parse(scheduling, "snooze it for an hour").command.duration == 60
        assert _parse(scheduling, "snooze").command.duration == 10

    def test_cancel_scheduled(self):
        result = _parse(scheduling, "cancel scheduled command 12")
        assert result.command.to_dict() == {"type": "cancel_scheduled_command", "scheduleId": "12"}

    def test_list_scheduled(self):
        assert _parse(scheduling, "list my scheduled commands").name == "list_scheduled_commands"


class TestSelectionRules:
    def test_remind_about_this(self):
        result = _parse(context, "remind me about this tomorrow")
        assert result.command.to_dict() == {"type": "remind_about_this", "reminderTime": "tomorrow"}

    def test_share_this(self):
        result = _parse(context, "share this with anna@example.com")
        assert result.command.to_dict() == {"type": "share_this", "recipientEmail": "anna@example.com"}

    def test_convert_to_task(self):
        assert _parse(context, "convert this to a task").command.to_dict() == {"type": "convert_to_task"}
        result = _parse(context, "convert this to a high priority task")
        assert result.command.priority == "high"

    def test_defer(self):
        assert _parse(context, "do this later").command.defer_minutes == 30
        assert _parse(context, "do this in 2 hours").command.defer_minutes == 120

    def test_add_this_to_project(self):
        result = _parse(context, "add this to project Apollo")
        assert result.command.to_dict() == {"type": "add_this_to_project", "projectName": "Apollo"}

    def test_selection_actions(self):
        assert _parse(context, "summarize this").name == "summarize_selected"
        assert _parse(context, "what is this?").name == "explain_this"
        assert _parse(context, "more like this").name == "find_similar"
        assert _parse(context, "where am I").name == "get_context"


class TestAutomationRules:
    def test_connect_zapier(self):
        result = _parse(automation, "connect zapier https://hooks.zapier.com/hooks/catch/123 for new email")
        assert result.command.to_dict() == {
            "type": "connect_zapier",
            "webhookUrl": "https://hooks.zapier.com/hooks/catch/123",
            "triggerType": "email_received",
        }

    def test_webhook_automation(self):
        result = _parse(automation, "when a task is completed, send webhook to https://example.com/hook")
        assert result.command.to_dict() == {
            "type": "create_automation",
            "name": "When a task is completed",
            "trigger": "task_completed",
            "webhookUrl": "https://example.com/hook",
            "provider": "custom",
        }

    def test_named_automation(self):
        result = _parse(automation, "create an automation called Lead Sync when a new contact is added using zapier")
        assert result.command.to_dict() == {
            "type": "create_automation",
            "name": "Lead Sync",
            "trigger": "contact_added",
            "provider": "zapier",
        }

    def test_paused_filter(self):
        result = _parse(automation, "list my paused automations")
        assert result.command.to_dict() == {"type": "list_automations", "filter": "inactive"}

    def test_workflow_steps(self):
        result = _parse(automation, "create workflow automation Onboarding that send welcome email then create task")
        assert result.command.to_dict() == {
            "type": "create_workflow_automation",
            "name": "Onboarding",
            "steps": [{"action": "send welcome email"}, {"action": "create task"}],
        }

    def test_test_and_delete(self):
        assert _parse(automation, "test the onboarding automation").command.automation_name == "onboarding"
        assert _parse(automation, "delete automation Slack Sync").command.automation_name == "Slack Sync"

    def test_schedule_with_timezone(self):
        result = _parse(automation, "schedule the backup automation every day at 2am utc")
        assert result.command.to_dict() == {
            "type": "set_automation_schedule",
            "automationName": "backup",
            "schedule": "every day at 2am",
            "timezone": "UTC",
        }

    def test_trigger_webhook(self):
        result = _parse(automation, "trigger webhook https://example.com/hook")
        assert result.command.to_dict() == {"type": "trigger_webhook", "webhookUrl": "https://example.com/hook"}


class TestWorkflowRules:
    def test_batch_create(self):
        result = _parse(workflows, "create these tasks: buy milk, call bob and book flights")
        assert result.command.to_dict() == {
            "type": "batch_create",
            "entityType": "task",
            "items": ["buy milk", "call bob", "book flights"],
        }

    def test_bulk_priority(self):
        result = _parse(workflows, "set priority of all tasks to high")
        assert result.command.to_dict() == {
            "type": "bulk_update",
            "entityType": "task",
            "filter": {},
            "updates": {"priority": "high"},
        }

    def test_copy_to_calendar(self):
        result = _parse(workflows, "copy this task to my calendar for tomorrow")
        assert result.command.to_dict() == {"type": "copy_to_calendar", "eventDetails": {"start_at": "tomorrow"}}

    def test_email_summary(self):
        result = _parse(workflows, "email me a weekly summary")
        assert result.command.to_dict() == {"type": "email_summary", "recipientEmail": "me", "summaryType": "weekly"}

    def test_template(self):
        result = _parse(workflows, "create a report from the weekly template")
        assert result.command.to_dict() == {"type": "create_from_template", "templateName": "weekly"}

    def test_trigger_and_stop(self):
        assert _parse(workflows, "run the onboarding workflow").command.workflow_id == "onboarding"
        assert _parse(workflows, "stop workflow sync-leads").command.workflow_id == "sync-leads"

    def test_create_workflow(self):
        result = _parse(workflows, "create a workflow called Weekly Review that collects reports")
        assert result.command.to_dict() == {
            "type": "create_workflow",
            "name": "Weekly Review",
            "description": "collects reports",
        }


class TestSequenceRules:
    def test_conditional_with_otherwise(self):
        result = _parse(sequences, "if my balance is low then show my transactions otherwise show my tasks")
        assert result.command.to_dict() == {
            "type": "conditional_command",
            "condition": "my balance is low",
            "ifTrue": {"type": "list_transactions"},
            "ifFalse": {"type": "list_tasks"},
        }

    def test_conditional_with_comma(self):
        result = _parse(sequences, "if it is raining, show my tasks")
        assert result.command.to_dict() == {
            "type": "conditional_command",
            "condition": "it is raining",
            "ifTrue": {"type": "list_tasks"},
        }
        assert result.confidence == 0.8

    def test_chain_waits_for_confirmation(self):
        result = _parse(sequences, "first check my balance then show my tasks and wait for confirmation")
        assert result.command.to_dict() == {
            "type": "chain_commands",
            "commands": [{"type": "check_balance"}, {"type": "list_tasks"}],
            "waitForConfirmation": True,
        }

    def test_chain_with_unknown_step_is_refused(self):
        assert _parse(sequences, "first check my balance then blorp") is None
