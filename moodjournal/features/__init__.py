"""
Features Module - Self-contained feature units.

- database: journal and mood-analysis repositories (Supabase)
- mood: extraction, normalization and supportive messages
- journaling: the pipeline that ties them together
"""
