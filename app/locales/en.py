# --- EN ---
ENtexts = {
    "ENG": {
        "welcome_lang_choice": "Hello, choose a language",
        "change_language": "🌐 Change language",
        "board_title": "🧺 <b>SpinHub</b>\nWiesenmühlenstraße 7/9",
        "board_footer": "© 2026 Wiesenmühlen Dormitory",
        "machine_title": "WM {id}",

        # Statuses
        "status_available": "Available",
        "status_in_use": "In Use",
        "status_out_of_order": "Out of Order",

        # Hints under the status
        "hint_ready": "Ready to use",
        "hint_remaining": "{time} remaining",
        "hint_bonus": "{time} Bonus Time Available!",
        "hint_unavailable": "Temporarily unavailable",

        # Buttons
        "btn_start": "Start Machine",
        "btn_new_wash": "New Wash",
        "btn_use_bonus": "Use Bonus ({time})",
        "btn_finish_early": "Finish Early",
        "btn_report_broken": "Report Broken",
        "btn_fix": "Mark as Fixed",
        "btn_refresh": "🔄 Refresh",
        "btn_cancel": "Cancel",
        "btn_reload": "Reload Application",

        # Start flow
        "duration_prompt": "Set duration (min) for WM {id}.\nSend a number or pick one below:",
        "duration_minutes": "{minutes} min",
        "machine_started": "✅ WM {id} started for {minutes} min.",

        # Errors
        "action_not_available": "This action is no longer available for this machine.",
        "unknown_machine": "This machine does not exist.",
        "error_title": "⚠️ <b>Something went wrong.</b>",
        "error_details": "The application encountered an error while rendering.",
    }
}
