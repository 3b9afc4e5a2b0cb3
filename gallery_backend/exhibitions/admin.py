from django.contrib import admin

from exhibitions.models import Exhibition, ExhibitionAttendance, ExhibitionMessage


@admin.register(Exhibition)
class ExhibitionAdmin(admin.ModelAdmin):
    list_display = ("title", "start", "end", "is_virtual", "featured")
    list_filter = ("is_virtual", "featured")
    search_fields = ("title", "organizer", "location")
    filter_horizontal = ("featured_artists", "artworks")


admin.site.register(ExhibitionAttendance)
admin.site.register(ExhibitionMessage)
