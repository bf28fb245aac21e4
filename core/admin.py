from django.contrib import admin

from .models import Media


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'name', 'is_directory', 'get_file_size', 'owner', 'directory', 'is_deleted']
    list_filter = ['is_directory', 'is_deleted', 'owner', 'created_at']
    search_fields = ['name', 'sha256']
    autocomplete_fields = ['owner']
    readonly_fields = ['created_at', 'sha256', 'get_file_size', 'storage_path']
    
    fieldsets = (
        (None, {'fields': ('name', 'is_directory', 'directory', 'content_type', 'is_deleted')}),
        ('Storage', {'fields': ('storage_path', 'get_file_size', 'sha256')}),
        ('Metadata', {'fields': ('created_at', 'owner')}),
    )
    
    def get_file_size(self, obj):
        if obj.size_bytes:
            size = obj.size_bytes
            for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
                if size < 1024.0 or unit == 'TB':
                    return f"{size:.2f} {unit}"
                size /= 1024.0
        return "-"
    get_file_size.short_description = 'File Size'
