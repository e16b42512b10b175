"""Notification processing pipeline for a Discourse-backed community client."""
