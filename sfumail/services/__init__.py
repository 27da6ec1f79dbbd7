"""Event dispatch services"""
